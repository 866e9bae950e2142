"""Embed application service.

Resolves public slugs to the agents and dashboards shown on embed pages.
Dashboards come from an ordered chain of resolvers; the first one that
knows a slug wins, so database dashboards shadow static client pages with
the same slug.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.ports.repositories import IAgentRepository
from embed.application.observability import (
    DefaultEmbedServiceProbe,
    EmbedServiceProbe,
)
from embed.domain import EmbeddedAgent, EmbeddedAgentCard, EmbeddedDashboard
from embed.ports import EmbedNotFoundError, IDashboardResolver


class EmbedService:
    """Read-only lookups behind the public embed pages."""

    def __init__(
        self,
        agent_repository: IAgentRepository,
        resolvers: Sequence[IDashboardResolver],
        session: AsyncSession,
        probe: EmbedServiceProbe | None = None,
    ):
        """Initialize EmbedService with dependencies.

        Args:
            agent_repository: Repository used to look up agents by slug
            resolvers: Dashboard resolvers, asked in order
            session: Database session shared with the repository and resolvers
            probe: Optional domain probe for observability
        """
        self._agent_repository = agent_repository
        self._resolvers = list(resolvers)
        self._session = session
        self._probe = probe or DefaultEmbedServiceProbe()

    async def resolve_agent(self, slug: str) -> EmbeddedAgent:
        """Resolve an agent by its public slug.

        Raises:
            EmbedNotFoundError: If no agent has the slug
        """
        async with self._session.begin():
            agent = await self._agent_repository.get_by_slug(slug)

        if agent is None:
            self._probe.agent_not_found(slug=slug)
            raise EmbedNotFoundError(f"Agent {slug} not found")

        self._probe.agent_resolved(slug=slug, workflow_id=agent.workflow_id)
        return EmbeddedAgent(
            name=agent.name,
            slug=agent.slug.value,
            workflow_id=agent.workflow_id,
        )

    async def resolve_dashboard(self, slug: str) -> EmbeddedDashboard:
        """Resolve a dashboard through the resolver chain.

        Raises:
            EmbedNotFoundError: If no resolver knows the slug
        """
        dashboard: EmbeddedDashboard | None = None
        async with self._session.begin():
            for resolver in self._resolvers:
                dashboard = await resolver.resolve(slug)
                if dashboard is not None:
                    break

        if dashboard is None:
            self._probe.dashboard_not_found(slug=slug)
            raise EmbedNotFoundError(f"Dashboard {slug} not found")

        self._probe.dashboard_resolved(
            slug=slug,
            source=dashboard.source.value,
            agent_count=len(dashboard.agents),
        )
        return dashboard

    async def resolve_dashboard_agent(
        self, dashboard_slug: str, agent_slug: str
    ) -> EmbeddedAgentCard:
        """Resolve an agent opened from a dashboard page.

        The agent must be on the dashboard.

        Raises:
            EmbedNotFoundError: If the dashboard is unknown or the agent is
                not on it
        """
        dashboard = await self.resolve_dashboard(dashboard_slug)
        card = dashboard.find_agent(agent_slug)
        if card is None:
            self._probe.dashboard_agent_not_found(
                dashboard_slug=dashboard_slug, agent_slug=agent_slug
            )
            raise EmbedNotFoundError(
                f"Agent {agent_slug} not found on dashboard {dashboard_slug}"
            )
        return card
