"""Dashboard aggregate for the catalog context."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from catalog.domain.exceptions import InvalidMembershipError, ValidationError
from catalog.domain.value_objects import (
    AgentId,
    DashboardId,
    DashboardMembership,
    Slug,
    TenantId,
)

MAX_TITLE_LENGTH = 255


def _unique(agent_ids: Iterable[AgentId]) -> list[AgentId]:
    """Drop repeated IDs, keeping the first occurrence of each."""
    seen: set[AgentId] = set()
    result: list[AgentId] = []
    for agent_id in agent_ids:
        if agent_id not in seen:
            seen.add(agent_id)
            result.append(agent_id)
    return result


@dataclass
class Dashboard:
    """Dashboard aggregate: a titled, ordered collection of agents.

    The dashboard owns its memberships. Agents themselves are independent
    aggregates and may appear on many dashboards, but at most once on each.

    Business rules:
    - Title is required (non-blank, at most 255 characters)
    - The slug is generated at creation and never changes
    - New members are appended after the current highest order, in the
      order the caller supplied them
    - Adding an agent that is already a member is a no-op, and so is
      removing one that is not
    """

    id: DashboardId
    title: str
    slug: Slug
    tenant_id: TenantId | None
    created_at: datetime
    updated_at: datetime
    memberships: list[DashboardMembership] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        self._validate_title(self.title)
        self.memberships.sort(key=lambda m: m.order)

    @staticmethod
    def _validate_title(title: str) -> None:
        if not title or not title.strip():
            raise ValidationError("Dashboard title is required")
        if len(title.strip()) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Dashboard title must be at most {MAX_TITLE_LENGTH} characters"
            )

    @classmethod
    def create(cls, title: str, tenant_id: TenantId | None = None) -> Dashboard:
        """Factory method for creating an empty dashboard with a generated slug.

        Raises:
            ValidationError: If the title is blank or too long
        """
        now = datetime.now(UTC)
        return cls(
            id=DashboardId.generate(),
            title=title.strip(),
            slug=Slug.generate(),
            tenant_id=tenant_id,
            created_at=now,
            updated_at=now,
        )

    @property
    def agent_ids(self) -> list[AgentId]:
        """Member agent IDs in display order."""
        return [m.agent_id for m in self.memberships]

    def has_agent(self, agent_id: AgentId) -> bool:
        return any(m.agent_id == agent_id for m in self.memberships)

    def retitle(self, title: str) -> None:
        self._validate_title(title)
        self.title = title.strip()
        self._touch()

    def assign_tenant(self, tenant_id: TenantId | None) -> None:
        """Scope the dashboard to a tenant, or to General Purpose with None."""
        self.tenant_id = tenant_id
        self._touch()

    def add_agents(self, agent_ids: Iterable[AgentId]) -> list[AgentId]:
        """Append agents that are not members yet.

        Args:
            agent_ids: Agents to add, in the order they should appear

        Returns:
            The agents that were actually added
        """
        next_order = max((m.order for m in self.memberships), default=-1) + 1
        now = datetime.now(UTC)
        added: list[AgentId] = []
        for agent_id in _unique(agent_ids):
            if self.has_agent(agent_id):
                continue
            self.memberships.append(
                DashboardMembership(agent_id=agent_id, order=next_order, created_at=now)
            )
            added.append(agent_id)
            next_order += 1

        if added:
            self._touch()
        return added

    def remove_agents(self, agent_ids: Iterable[AgentId]) -> list[AgentId]:
        """Remove the given agents; non-members are ignored.

        Returns:
            The agents that were actually removed
        """
        to_remove = set(agent_ids)
        removed = [m.agent_id for m in self.memberships if m.agent_id in to_remove]
        if removed:
            self.memberships = [
                m for m in self.memberships if m.agent_id not in to_remove
            ]
            self._touch()
        return removed

    def set_agents(
        self, agent_ids: Iterable[AgentId]
    ) -> tuple[list[AgentId], list[AgentId]]:
        """Make the membership equal to the given set of agents.

        Members missing from ``agent_ids`` are removed first; agents not yet
        on the dashboard are then appended in the order given. Agents that
        stay keep their current order.

        Returns:
            Tuple of (added, removed) agent IDs
        """
        desired = _unique(agent_ids)
        desired_set = set(desired)
        removed = self.remove_agents(
            [m.agent_id for m in self.memberships if m.agent_id not in desired_set]
        )
        added = self.add_agents(desired)
        return added, removed

    def reorder_agents(self, agent_ids: Iterable[AgentId]) -> None:
        """Rewrite display order to follow ``agent_ids`` exactly.

        Orders are renumbered 0..n-1. Membership timestamps are preserved.

        Raises:
            InvalidMembershipError: If agent_ids repeats an agent or is not
                exactly the current member set
        """
        ordered = list(agent_ids)
        if len(ordered) != len(set(ordered)):
            raise InvalidMembershipError("Reorder list contains duplicate agents")
        if set(ordered) != set(self.agent_ids):
            raise InvalidMembershipError(
                "Reorder list must contain exactly the dashboard's current agents"
            )

        created = {m.agent_id: m.created_at for m in self.memberships}
        self.memberships = [
            DashboardMembership(
                agent_id=agent_id, order=index, created_at=created[agent_id]
            )
            for index, agent_id in enumerate(ordered)
        ]
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(UTC)
