"""SQLAlchemy implementation of ITenantRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.domain.aggregates import Tenant
from catalog.domain.value_objects import TenantId
from catalog.infrastructure.models import AgentModel, TenantModel
from catalog.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from catalog.ports.exceptions import DuplicateTenantNameError
from catalog.ports.read_models import TenantSummary
from catalog.ports.repositories import ITenantRepository


def _is_duplicate_name(error: IntegrityError) -> bool:
    # PostgreSQL reports the index name, SQLite the table.column pair
    message = str(error.orig)
    return "ix_tenants_name" in message or "tenants.name" in message


class TenantRepository(ITenantRepository):
    """Repository managing storage for Tenant aggregates.

    The unique index on tenants.name is the authority on name uniqueness.
    The lookup before writing only produces a clearer error for the common
    case; a concurrent insert that slips past it still fails on the index
    and is reported the same way.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def save(self, tenant: Tenant) -> None:
        """Insert or update a tenant.

        Args:
            tenant: The Tenant aggregate to persist

        Raises:
            DuplicateTenantNameError: If another tenant already has this name
        """
        existing = await self.get_by_name(tenant.name)
        if existing and existing.id != tenant.id:
            self._probe.duplicate_tenant_name(tenant.name)
            raise DuplicateTenantNameError(f"Tenant '{tenant.name}' already exists")

        try:
            model = await self._session.get(TenantModel, tenant.id.value)

            if model:
                model.name = tenant.name
                model.updated_at = tenant.updated_at
            else:
                model = TenantModel(
                    id=tenant.id.value,
                    name=tenant.name,
                    created_at=tenant.created_at,
                    updated_at=tenant.updated_at,
                )
                self._session.add(model)

            await self._session.flush()

        except IntegrityError as e:
            if _is_duplicate_name(e):
                self._probe.duplicate_tenant_name(tenant.name)
                raise DuplicateTenantNameError(
                    f"Tenant '{tenant.name}' already exists"
                ) from e
            raise

        self._probe.tenant_saved(tenant.id.value)

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Fetch a tenant by ID.

        Args:
            tenant_id: The unique identifier of the tenant

        Returns:
            The Tenant aggregate, or None if not found
        """
        model = await self._session.get(TenantModel, tenant_id.value)
        if model is None:
            return None

        self._probe.tenant_retrieved(model.id)
        return self._to_domain(model)

    async def get_by_name(self, name: str) -> Tenant | None:
        """Fetch a tenant by exact name.

        Args:
            name: The tenant name

        Returns:
            The Tenant aggregate, or None if not found
        """
        stmt = select(TenantModel).where(TenantModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.tenant_retrieved(model.id)
        return self._to_domain(model)

    async def list_with_agent_counts(self) -> list[TenantSummary]:
        """Fetch all tenants, newest first, with the number of agents in each.

        Returns:
            List of TenantSummary entries
        """
        agent_count = func.count(AgentModel.id).label("agent_count")
        stmt = (
            select(TenantModel, agent_count)
            .outerjoin(AgentModel, AgentModel.tenant_id == TenantModel.id)
            .group_by(TenantModel.id)
            .order_by(TenantModel.created_at.desc())
        )
        result = await self._session.execute(stmt)

        summaries = [
            TenantSummary(tenant=self._to_domain(model), agent_count=count)
            for model, count in result.all()
        ]

        self._probe.tenants_listed(len(summaries))
        return summaries

    async def delete(self, tenant: Tenant) -> bool:
        """Delete a tenant row.

        Args:
            tenant: The Tenant aggregate to delete

        Returns:
            True if deleted, False if not found
        """
        model = await self._session.get(TenantModel, tenant.id.value)
        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.tenant_deleted(tenant.id.value)
        return True

    @staticmethod
    def _to_domain(model: TenantModel) -> Tenant:
        return Tenant(
            id=TenantId(value=model.id),
            name=model.name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
