"""Dashboard resolvers backed by the catalog store and by settings.

``DatabaseDashboardResolver`` serves dashboards managed through the admin
API. ``StaticDashboardResolver`` serves the older per-client pages whose
agents are listed by workflow ID in configuration.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from catalog.domain.aggregates import Agent
from catalog.ports.repositories import IAgentRepository, IDashboardRepository
from embed.domain import (
    DashboardSource,
    EmbeddedAgentCard,
    EmbeddedDashboard,
    agent_icon,
)


def _card(agent: Agent, dashboard_slug: str) -> EmbeddedAgentCard:
    return EmbeddedAgentCard(
        name=agent.name,
        slug=agent.slug.value,
        workflow_id=agent.workflow_id,
        icon=agent_icon(agent.name, dashboard_slug),
    )


class DatabaseDashboardResolver:
    """Resolves dashboards stored in the catalog, members in display order."""

    def __init__(self, dashboard_repository: IDashboardRepository) -> None:
        self._dashboard_repository = dashboard_repository

    async def resolve(self, slug: str) -> EmbeddedDashboard | None:
        dashboard = await self._dashboard_repository.get_by_slug(slug)
        if dashboard is None:
            return None

        entries = await self._dashboard_repository.list_member_agents(dashboard.id)
        return EmbeddedDashboard(
            title=dashboard.title,
            slug=dashboard.slug.value,
            source=DashboardSource.DATABASE,
            agents=[_card(entry.agent, slug) for entry in entries],
        )


class StaticDashboardResolver:
    """Resolves configured client pages to the agents running their workflows.

    Agents are matched by workflow ID; workflow IDs with no agent are
    skipped silently.
    """

    def __init__(
        self,
        agent_repository: IAgentRepository,
        clients: Mapping[str, Sequence[str]],
        title: str,
    ) -> None:
        """Initialize the resolver.

        Args:
            agent_repository: Repository used to find agents by workflow ID
            clients: Client slug to the workflow IDs shown on its page
            title: Title used for every client page
        """
        self._agent_repository = agent_repository
        self._clients = clients
        self._title = title

    async def resolve(self, slug: str) -> EmbeddedDashboard | None:
        workflow_ids = self._clients.get(slug)
        if workflow_ids is None:
            return None

        agents = (
            await self._agent_repository.list_by_workflow_ids(list(workflow_ids))
            if workflow_ids
            else []
        )
        return EmbeddedDashboard(
            title=self._title,
            slug=slug,
            source=DashboardSource.STATIC,
            agents=[_card(agent, slug) for agent in agents],
        )
