"""Pydantic models for embed responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from embed.domain import EmbeddedAgent, EmbeddedAgentCard, EmbeddedDashboard


class EmbeddedAgentResponse(BaseModel):
    """Everything a page needs to open an agent's chat widget."""

    name: str = Field(..., description="Agent display name")
    slug: str = Field(..., description="Agent public slug")
    workflow_id: str = Field(..., description="Hosted chat workflow ID")

    @classmethod
    def from_domain(cls, agent: EmbeddedAgent) -> EmbeddedAgentResponse:
        return cls(name=agent.name, slug=agent.slug, workflow_id=agent.workflow_id)


class EmbeddedAgentCardResponse(BaseModel):
    """An agent tile on a dashboard page."""

    name: str
    slug: str
    workflow_id: str
    icon: str = Field(..., description="Emoji shown on the card")

    @classmethod
    def from_domain(cls, card: EmbeddedAgentCard) -> EmbeddedAgentCardResponse:
        return cls(
            name=card.name,
            slug=card.slug,
            workflow_id=card.workflow_id,
            icon=card.icon,
        )


class EmbeddedDashboardResponse(BaseModel):
    """A dashboard page: title and agent cards in display order."""

    title: str
    slug: str
    source: str = Field(..., description="'database' or 'static'")
    agents: list[EmbeddedAgentCardResponse] = Field(
        ..., description="Agent cards; empty when the dashboard has no agents"
    )

    @classmethod
    def from_domain(cls, dashboard: EmbeddedDashboard) -> EmbeddedDashboardResponse:
        return cls(
            title=dashboard.title,
            slug=dashboard.slug,
            source=dashboard.source.value,
            agents=[EmbeddedAgentCardResponse.from_domain(c) for c in dashboard.agents],
        )
