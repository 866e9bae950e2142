"""Value objects for the public embed surface.

These are read-only views of catalog data, shaped for the pages that host
the chat widget. They carry nothing the public pages do not display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class DashboardSource(StrEnum):
    """Where an embedded dashboard was found."""

    DATABASE = "database"
    STATIC = "static"


@dataclass(frozen=True)
class EmbeddedAgent:
    """A single agent as opened by its own embed page."""

    name: str
    slug: str
    workflow_id: str


@dataclass(frozen=True)
class EmbeddedAgentCard:
    """An agent tile on an embedded dashboard."""

    name: str
    slug: str
    workflow_id: str
    icon: str


@dataclass(frozen=True)
class EmbeddedDashboard:
    """A dashboard as rendered on its public page.

    An empty ``agents`` list is valid; the page shows an empty state.
    """

    title: str
    slug: str
    source: DashboardSource
    agents: list[EmbeddedAgentCard] = field(default_factory=list)

    def find_agent(self, agent_slug: str) -> EmbeddedAgentCard | None:
        for card in self.agents:
            if card.slug == agent_slug:
                return card
        return None
