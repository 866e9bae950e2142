"""SQLAlchemy implementation of IDashboardRepository.

Dashboards are persisted across two tables: the dashboards row and one
dashboard_agents row per member agent. Saving a dashboard brings the
membership rows in line with the aggregate.
"""

from __future__ import annotations

from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.domain.aggregates import Dashboard
from catalog.domain.value_objects import (
    AgentId,
    DashboardId,
    DashboardMembership,
    Slug,
    TenantFilter,
    TenantId,
    TenantScope,
)
from catalog.infrastructure.agent_repository import agent_to_domain
from catalog.infrastructure.models import (
    AgentModel,
    DashboardAgentModel,
    DashboardModel,
    TenantModel,
)
from catalog.infrastructure.observability import (
    DashboardRepositoryProbe,
    DefaultDashboardRepositoryProbe,
)
from catalog.ports.exceptions import DuplicateMembershipError, DuplicateSlugError
from catalog.ports.read_models import DashboardAgentEntry, DashboardSummary
from catalog.ports.repositories import IDashboardRepository


def _is_duplicate_slug(error: IntegrityError) -> bool:
    message = str(error.orig)
    return "ix_dashboards_slug" in message or "dashboards.slug" in message


def _is_duplicate_membership(error: IntegrityError) -> bool:
    # PostgreSQL names the primary key; SQLite lists the key columns
    message = str(error.orig)
    return (
        "pk_dashboard_agents" in message
        or "dashboard_agents.dashboard_id, dashboard_agents.agent_id" in message
    )


class DashboardRepository(IDashboardRepository):
    """Repository managing storage for Dashboard aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: DashboardRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultDashboardRepositoryProbe()

    async def save(self, dashboard: Dashboard) -> None:
        """Insert or update a dashboard and sync its membership rows.

        Args:
            dashboard: The Dashboard aggregate to persist

        Raises:
            DuplicateSlugError: If another dashboard already has this slug
            DuplicateMembershipError: If a member row was inserted concurrently
        """
        tenant_id = dashboard.tenant_id.value if dashboard.tenant_id else None

        try:
            model = await self._session.get(DashboardModel, dashboard.id.value)

            if model:
                model.title = dashboard.title
                model.tenant_id = tenant_id
                model.updated_at = dashboard.updated_at
            else:
                model = DashboardModel(
                    id=dashboard.id.value,
                    title=dashboard.title,
                    slug=dashboard.slug.value,
                    tenant_id=tenant_id,
                    created_at=dashboard.created_at,
                    updated_at=dashboard.updated_at,
                )
                self._session.add(model)

            # The dashboard row must exist before membership rows reference it
            await self._session.flush()

        except IntegrityError as e:
            if _is_duplicate_slug(e):
                self._probe.duplicate_slug(dashboard.slug.value)
                raise DuplicateSlugError(
                    f"Dashboard slug '{dashboard.slug.value}' is already taken"
                ) from e
            raise

        await self._sync_memberships(dashboard)
        self._probe.dashboard_saved(dashboard.id.value, len(dashboard.memberships))

    async def _sync_memberships(self, dashboard: Dashboard) -> None:
        desired = {m.agent_id.value: m for m in dashboard.memberships}

        stmt = select(DashboardAgentModel).where(
            DashboardAgentModel.dashboard_id == dashboard.id.value
        )
        result = await self._session.execute(stmt)
        current = {row.agent_id: row for row in result.scalars().all()}

        for agent_id, row in current.items():
            membership = desired.get(agent_id)
            if membership is None:
                await self._session.delete(row)
            elif row.order != membership.order:
                row.order = membership.order

        for agent_id, membership in desired.items():
            if agent_id not in current:
                self._session.add(
                    DashboardAgentModel(
                        dashboard_id=dashboard.id.value,
                        agent_id=agent_id,
                        order=membership.order,
                        created_at=membership.created_at,
                    )
                )

        try:
            await self._session.flush()
        except IntegrityError as e:
            if _is_duplicate_membership(e):
                self._probe.duplicate_membership(dashboard.id.value)
                raise DuplicateMembershipError(
                    f"Dashboard {dashboard.id.value} membership changed concurrently"
                ) from e
            raise

    async def get_by_id(self, dashboard_id: DashboardId) -> Dashboard | None:
        model = await self._session.get(DashboardModel, dashboard_id.value)
        if model is None:
            return None

        memberships = await self._load_memberships([model.id])
        return self._to_domain(model, memberships[model.id])

    async def get_by_slug(self, slug: str) -> Dashboard | None:
        stmt = select(DashboardModel).where(DashboardModel.slug == slug)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        memberships = await self._load_memberships([model.id])
        return self._to_domain(model, memberships[model.id])

    async def list_summaries(
        self, tenant_filter: TenantFilter
    ) -> list[DashboardSummary]:
        """Fetch dashboards matching the filter, newest first.

        Args:
            tenant_filter: Which dashboards to include

        Returns:
            List of DashboardSummary entries with tenant name and agent count
        """
        stmt = (
            select(DashboardModel, TenantModel.name)
            .outerjoin(TenantModel, TenantModel.id == DashboardModel.tenant_id)
            .order_by(DashboardModel.created_at.desc())
        )

        if tenant_filter.scope == TenantScope.GENERAL:
            stmt = stmt.where(DashboardModel.tenant_id.is_(None))
        elif tenant_filter.scope == TenantScope.TENANT:
            assert tenant_filter.tenant_id is not None
            stmt = stmt.where(
                DashboardModel.tenant_id == tenant_filter.tenant_id.value
            )

        result = await self._session.execute(stmt)
        rows = result.all()
        memberships = await self._load_memberships([model.id for model, _ in rows])

        summaries = [
            DashboardSummary(
                dashboard=self._to_domain(model, memberships[model.id]),
                tenant_name=tenant_name,
                agent_count=len(memberships[model.id]),
            )
            for model, tenant_name in rows
        ]

        self._probe.dashboards_listed(len(summaries))
        return summaries

    async def list_by_tenant(self, tenant_id: TenantId) -> list[Dashboard]:
        stmt = select(DashboardModel).where(DashboardModel.tenant_id == tenant_id.value)
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        memberships = await self._load_memberships([model.id for model in models])
        return [self._to_domain(model, memberships[model.id]) for model in models]

    async def list_member_agents(
        self, dashboard_id: DashboardId
    ) -> list[DashboardAgentEntry]:
        """Fetch a dashboard's agents by ascending membership order.

        Returns:
            List of DashboardAgentEntry with each agent's tenant name
        """
        stmt = (
            select(AgentModel, TenantModel.name, DashboardAgentModel.order)
            .join(DashboardAgentModel, DashboardAgentModel.agent_id == AgentModel.id)
            .outerjoin(TenantModel, TenantModel.id == AgentModel.tenant_id)
            .where(DashboardAgentModel.dashboard_id == dashboard_id.value)
            .order_by(DashboardAgentModel.order.asc())
        )
        result = await self._session.execute(stmt)

        return [
            DashboardAgentEntry(
                agent=agent_to_domain(model),
                tenant_name=tenant_name,
                order=order,
            )
            for model, tenant_name, order in result.all()
        ]

    async def delete(self, dashboard: Dashboard) -> bool:
        """Delete a dashboard row; memberships cascade in the database.

        Returns:
            True if deleted, False if not found
        """
        model = await self._session.get(DashboardModel, dashboard.id.value)
        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.dashboard_deleted(dashboard.id.value)
        return True

    async def _load_memberships(
        self, dashboard_ids: list[str]
    ) -> dict[str, list[DashboardMembership]]:
        memberships: dict[str, list[DashboardMembership]] = defaultdict(list)
        if not dashboard_ids:
            return memberships

        stmt = (
            select(DashboardAgentModel)
            .where(DashboardAgentModel.dashboard_id.in_(dashboard_ids))
            .order_by(DashboardAgentModel.order.asc())
        )
        result = await self._session.execute(stmt)

        for row in result.scalars().all():
            memberships[row.dashboard_id].append(
                DashboardMembership(
                    agent_id=AgentId(value=row.agent_id),
                    order=row.order,
                    created_at=row.created_at,
                )
            )
        return memberships

    @staticmethod
    def _to_domain(
        model: DashboardModel, memberships: list[DashboardMembership]
    ) -> Dashboard:
        return Dashboard(
            id=DashboardId(value=model.id),
            title=model.title,
            slug=Slug(value=model.slug),
            tenant_id=TenantId(value=model.tenant_id) if model.tenant_id else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
            memberships=list(memberships),
        )
