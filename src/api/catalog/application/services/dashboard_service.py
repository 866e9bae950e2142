"""Dashboard application service for the catalog bounded context.

Dashboards group existing agents in a chosen order. Membership changes are
validated against the agent store first: referencing an agent that does not
exist fails the whole request and changes nothing.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.observability import (
    DashboardServiceProbe,
    DefaultDashboardServiceProbe,
)
from catalog.application.services.tenant_resolver import TenantResolver
from catalog.domain.aggregates import Dashboard
from catalog.domain.exceptions import ValidationError
from catalog.domain.value_objects import (
    AgentId,
    DashboardId,
    NoTenant,
    TenantChoice,
    TenantFilter,
)
from catalog.ports.exceptions import AgentNotFoundError, DashboardNotFoundError
from catalog.ports.read_models import DashboardDetails, DashboardSummary
from catalog.ports.repositories import (
    IAgentRepository,
    IDashboardRepository,
    ITenantRepository,
)


class DashboardService:
    """Application service for dashboards and their agent membership."""

    def __init__(
        self,
        dashboard_repository: IDashboardRepository,
        agent_repository: IAgentRepository,
        tenant_repository: ITenantRepository,
        tenant_resolver: TenantResolver,
        session: AsyncSession,
        probe: DashboardServiceProbe | None = None,
    ):
        """Initialize DashboardService with dependencies.

        Args:
            dashboard_repository: Repository for dashboard persistence
            agent_repository: Repository used to check referenced agents
            tenant_repository: Repository used to look up tenant names
            tenant_resolver: Resolves tenant choices, creating new tenants
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._dashboard_repository = dashboard_repository
        self._agent_repository = agent_repository
        self._tenant_repository = tenant_repository
        self._tenant_resolver = tenant_resolver
        self._session = session
        self._probe = probe or DefaultDashboardServiceProbe()

    async def create_dashboard(
        self,
        title: str,
        tenant: TenantChoice = NoTenant(),
        agent_ids: Sequence[AgentId] = (),
    ) -> Dashboard:
        """Create a dashboard, optionally with initial agents.

        Args:
            title: Dashboard title
            tenant: Existing tenant, new tenant name, or no tenant
            agent_ids: Initial members in display order

        Returns:
            The created Dashboard aggregate

        Raises:
            ValidationError: If the title is blank or a new tenant name is invalid
            TenantNotFoundError: If an existing tenant choice does not exist
            DuplicateTenantNameError: If a new tenant name is already taken
            AgentNotFoundError: If any agent ID does not exist
            DuplicateSlugError: If the generated slug collides
        """
        dashboard = Dashboard.create(title=title)
        choice = await self._tenant_resolver.create_if_new(tenant)

        async with self._session.begin():
            dashboard.assign_tenant(await self._tenant_resolver.tenant_id_for(choice))
            if agent_ids:
                await self._require_agents(agent_ids, dashboard_id=None)
                dashboard.add_agents(agent_ids)
            await self._dashboard_repository.save(dashboard)

        self._probe.dashboard_created(
            dashboard_id=dashboard.id.value,
            slug=dashboard.slug.value,
            tenant_id=dashboard.tenant_id.value if dashboard.tenant_id else None,
        )
        return dashboard

    async def get_dashboard(self, dashboard_id: DashboardId) -> Dashboard:
        """Retrieve a dashboard with its memberships.

        Raises:
            DashboardNotFoundError: If the dashboard does not exist
        """
        async with self._session.begin():
            return await self._load(dashboard_id)

    async def get_dashboard_with_agents(
        self, dashboard_id: DashboardId
    ) -> DashboardDetails:
        """Retrieve a dashboard, its tenant name and its agents in order.

        Raises:
            DashboardNotFoundError: If the dashboard does not exist
        """
        async with self._session.begin():
            dashboard = await self._load(dashboard_id)
            tenant_name = None
            if dashboard.tenant_id is not None:
                tenant = await self._tenant_repository.get_by_id(dashboard.tenant_id)
                tenant_name = tenant.name if tenant else None
            agents = await self._dashboard_repository.list_member_agents(dashboard_id)

        return DashboardDetails(
            dashboard=dashboard, tenant_name=tenant_name, agents=agents
        )

    async def list_dashboards(
        self, tenant_filter: TenantFilter = TenantFilter()
    ) -> list[DashboardSummary]:
        """List dashboards, newest first, with tenant names and agent counts."""
        async with self._session.begin():
            summaries = await self._dashboard_repository.list_summaries(tenant_filter)

        self._probe.dashboards_listed(
            count=len(summaries), scope=tenant_filter.scope.value
        )
        return summaries

    async def update_dashboard(
        self,
        dashboard_id: DashboardId,
        title: str | None = None,
        tenant: TenantChoice | None = None,
        agent_ids: Sequence[AgentId] | None = None,
    ) -> Dashboard:
        """Apply a partial update to a dashboard.

        When ``agent_ids`` is given the membership is replaced as in
        set_membership. The slug cannot be changed.

        Raises:
            ValidationError: If no field is given or a given value is invalid
            DashboardNotFoundError: If the dashboard does not exist
            TenantNotFoundError: If an existing tenant choice does not exist
            DuplicateTenantNameError: If a new tenant name is already taken
            AgentNotFoundError: If any agent ID does not exist
        """
        if title is None and tenant is None and agent_ids is None:
            raise ValidationError("At least one field must be provided for update")

        choice = (
            await self._tenant_resolver.create_if_new(tenant)
            if tenant is not None
            else None
        )

        changed: list[str] = []
        added: list[AgentId] = []
        removed: list[AgentId] = []
        async with self._session.begin():
            dashboard = await self._load(dashboard_id)

            if title is not None:
                dashboard.retitle(title)
                changed.append("title")
            if choice is not None:
                dashboard.assign_tenant(
                    await self._tenant_resolver.tenant_id_for(choice)
                )
                changed.append("tenant_id")
            if agent_ids is not None:
                await self._require_agents(agent_ids, dashboard_id=dashboard_id)
                added, removed = dashboard.set_agents(agent_ids)
                changed.append("agent_ids")

            await self._dashboard_repository.save(dashboard)

        self._probe.dashboard_updated(dashboard_id=dashboard_id.value, fields=changed)
        if added or removed:
            self._report_membership(dashboard_id, added, removed)
        return dashboard

    async def delete_dashboard(self, dashboard_id: DashboardId) -> None:
        """Delete a dashboard and its memberships. Agents are untouched.

        Raises:
            DashboardNotFoundError: If the dashboard does not exist
        """
        async with self._session.begin():
            dashboard = await self._load(dashboard_id)
            await self._dashboard_repository.delete(dashboard)

        self._probe.dashboard_deleted(dashboard_id=dashboard_id.value)

    async def set_membership(
        self, dashboard_id: DashboardId, agent_ids: Sequence[AgentId]
    ) -> Dashboard:
        """Make the dashboard's agents exactly ``agent_ids``.

        Agents that stay keep their order; new ones are appended in the
        order given. An empty list clears the dashboard.

        Raises:
            DashboardNotFoundError: If the dashboard does not exist
            AgentNotFoundError: If any agent ID does not exist
        """
        async with self._session.begin():
            dashboard = await self._load(dashboard_id)
            await self._require_agents(agent_ids, dashboard_id=dashboard_id)
            added, removed = dashboard.set_agents(agent_ids)
            await self._dashboard_repository.save(dashboard)

        self._report_membership(dashboard_id, added, removed)
        return dashboard

    async def add_agents(
        self, dashboard_id: DashboardId, agent_ids: Sequence[AgentId]
    ) -> Dashboard:
        """Append agents to a dashboard; existing members are skipped.

        Raises:
            ValidationError: If agent_ids is empty
            DashboardNotFoundError: If the dashboard does not exist
            AgentNotFoundError: If any agent ID does not exist
        """
        if not agent_ids:
            raise ValidationError("At least one agent must be given")

        async with self._session.begin():
            dashboard = await self._load(dashboard_id)
            await self._require_agents(agent_ids, dashboard_id=dashboard_id)
            added = dashboard.add_agents(agent_ids)
            await self._dashboard_repository.save(dashboard)

        self._report_membership(dashboard_id, added, [])
        return dashboard

    async def remove_agents(
        self, dashboard_id: DashboardId, agent_ids: Sequence[AgentId]
    ) -> Dashboard:
        """Remove agents from a dashboard; non-members are ignored.

        Raises:
            ValidationError: If agent_ids is empty
            DashboardNotFoundError: If the dashboard does not exist
        """
        if not agent_ids:
            raise ValidationError("At least one agent must be given")

        async with self._session.begin():
            dashboard = await self._load(dashboard_id)
            removed = dashboard.remove_agents(agent_ids)
            await self._dashboard_repository.save(dashboard)

        self._report_membership(dashboard_id, [], removed)
        return dashboard

    async def reorder_agents(
        self, dashboard_id: DashboardId, agent_ids: Sequence[AgentId]
    ) -> Dashboard:
        """Set the display order of a dashboard's agents.

        Raises:
            DashboardNotFoundError: If the dashboard does not exist
            InvalidMembershipError: If agent_ids is not exactly the member set
        """
        async with self._session.begin():
            dashboard = await self._load(dashboard_id)
            dashboard.reorder_agents(agent_ids)
            await self._dashboard_repository.save(dashboard)

        self._probe.agents_reordered(
            dashboard_id=dashboard_id.value, agent_count=len(dashboard.memberships)
        )
        return dashboard

    async def _load(self, dashboard_id: DashboardId) -> Dashboard:
        dashboard = await self._dashboard_repository.get_by_id(dashboard_id)
        if dashboard is None:
            self._probe.dashboard_not_found(dashboard_id=dashboard_id.value)
            raise DashboardNotFoundError(f"Dashboard {dashboard_id} not found")
        return dashboard

    async def _require_agents(
        self, agent_ids: Sequence[AgentId], dashboard_id: DashboardId | None
    ) -> None:
        """Raise AgentNotFoundError unless every ID names an existing agent."""
        wanted = list(dict.fromkeys(agent_ids))
        if not wanted:
            return

        found = {agent.id for agent in await self._agent_repository.get_many(wanted)}
        missing = [agent_id.value for agent_id in wanted if agent_id not in found]
        if missing:
            self._probe.unknown_agents_requested(
                dashboard_id=dashboard_id.value if dashboard_id else None,
                agent_ids=missing,
            )
            raise AgentNotFoundError(f"Agents not found: {', '.join(missing)}")

    def _report_membership(
        self,
        dashboard_id: DashboardId,
        added: list[AgentId],
        removed: list[AgentId],
    ) -> None:
        self._probe.membership_changed(
            dashboard_id=dashboard_id.value,
            added=[a.value for a in added],
            removed=[r.value for r in removed],
        )
