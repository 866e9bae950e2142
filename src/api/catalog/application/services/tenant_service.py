"""Tenant application service for the catalog bounded context.

Handles tenant management (create, rename, read, list) and coordinates
tenant deletion, which must decide what happens to the tenant's agents and
detach its dashboards before the tenant row can go.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from catalog.domain.aggregates import Tenant
from catalog.domain.exceptions import ValidationError
from catalog.domain.value_objects import TenantDisposition, TenantFilter, TenantId
from catalog.ports.exceptions import (
    DuplicateTenantNameError,
    NotFoundError,
    TenantDeletionError,
    TenantNotFoundError,
)
from catalog.ports.read_models import TenantDeletionResult, TenantSummary
from catalog.ports.repositories import (
    IAgentRepository,
    IDashboardRepository,
    ITenantRepository,
)


class TenantService:
    """Application service for tenant management.

    Every operation runs in a single transaction on the injected session.
    """

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        agent_repository: IAgentRepository,
        dashboard_repository: IDashboardRepository,
        session: AsyncSession,
        probe: TenantServiceProbe | None = None,
    ):
        """Initialize TenantService with dependencies.

        Args:
            tenant_repository: Repository for tenant persistence
            agent_repository: Repository for agent persistence (for deletion)
            dashboard_repository: Repository for dashboard persistence (for deletion)
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._tenant_repository = tenant_repository
        self._agent_repository = agent_repository
        self._dashboard_repository = dashboard_repository
        self._session = session
        self._probe = probe or DefaultTenantServiceProbe()

    async def create_tenant(self, name: str) -> Tenant:
        """Create a new tenant.

        Args:
            name: The tenant name; surrounding whitespace is trimmed

        Returns:
            The created Tenant aggregate

        Raises:
            InvalidTenantNameError: If the name breaks the naming rules
            DuplicateTenantNameError: If a tenant with this name already exists
        """
        tenant = Tenant.create(name=name)

        async with self._session.begin():
            try:
                await self._tenant_repository.save(tenant)
            except DuplicateTenantNameError:
                self._probe.duplicate_tenant_name(name=tenant.name)
                raise

        self._probe.tenant_created(tenant_id=tenant.id.value, name=tenant.name)
        return tenant

    async def get_tenant(self, tenant_id: TenantId) -> Tenant:
        """Retrieve a tenant by ID.

        Raises:
            TenantNotFoundError: If the tenant does not exist
        """
        async with self._session.begin():
            tenant = await self._tenant_repository.get_by_id(tenant_id)

        if tenant is None:
            self._probe.tenant_not_found(tenant_id=tenant_id.value)
            raise TenantNotFoundError(f"Tenant {tenant_id} not found")

        self._probe.tenant_retrieved(tenant_id=tenant_id.value)
        return tenant

    async def rename_tenant(self, tenant_id: TenantId, name: str) -> Tenant:
        """Rename a tenant.

        Renaming a tenant to its current name succeeds without conflict.

        Args:
            tenant_id: The tenant to rename
            name: The new name; surrounding whitespace is trimmed

        Returns:
            The updated Tenant aggregate

        Raises:
            TenantNotFoundError: If the tenant does not exist
            InvalidTenantNameError: If the name breaks the naming rules
            DuplicateTenantNameError: If another tenant already has the name
        """
        async with self._session.begin():
            tenant = await self._tenant_repository.get_by_id(tenant_id)
            if tenant is None:
                self._probe.tenant_not_found(tenant_id=tenant_id.value)
                raise TenantNotFoundError(f"Tenant {tenant_id} not found")

            tenant.rename(name)
            try:
                await self._tenant_repository.save(tenant)
            except DuplicateTenantNameError:
                self._probe.duplicate_tenant_name(name=tenant.name)
                raise

        self._probe.tenant_renamed(tenant_id=tenant_id.value, name=tenant.name)
        return tenant

    async def list_tenants(self) -> list[TenantSummary]:
        """List all tenants, newest first, with their agent counts.

        Agents without a tenant (General Purpose) are not counted anywhere.
        """
        async with self._session.begin():
            summaries = await self._tenant_repository.list_with_agent_counts()

        self._probe.tenants_listed(count=len(summaries))
        return summaries

    async def delete_tenant(
        self,
        tenant_id: TenantId,
        disposition: TenantDisposition,
        target_tenant_id: TenantId | None = None,
    ) -> TenantDeletionResult:
        """Delete a tenant after resolving its agents and dashboards.

        The disposition decides what happens to the tenant's agents:
        - MAKE_GENERAL: agents move to General Purpose (no tenant)
        - REASSIGN: agents move to ``target_tenant_id``
        - DELETE_AGENTS: agents are deleted, along with their dashboard
          memberships

        Independently of the disposition, the tenant's dashboards are moved
        to General Purpose; dashboards are never deleted or reassigned.

        All changes happen in one transaction. If any of them fails, the
        transaction is rolled back and TenantDeletionError is raised, so
        callers never observe a partial deletion.

        Args:
            tenant_id: The tenant to delete
            disposition: What to do with the tenant's agents
            target_tenant_id: Receiving tenant, required for REASSIGN only

        Returns:
            Counts of agents affected and dashboards cleared

        Raises:
            ValidationError: If the target is missing for REASSIGN, equals
                the tenant being deleted, or is given for another disposition
            TenantNotFoundError: If the tenant or the target does not exist
            TenantDeletionError: If applying the deletion fails
        """
        self._validate_disposition(tenant_id, disposition, target_tenant_id)

        try:
            async with self._session.begin():
                tenant = await self._tenant_repository.get_by_id(tenant_id)
                if tenant is None:
                    self._probe.tenant_not_found(tenant_id=tenant_id.value)
                    raise TenantNotFoundError(f"Tenant {tenant_id} not found")

                if target_tenant_id is not None:
                    target = await self._tenant_repository.get_by_id(target_tenant_id)
                    if target is None:
                        self._probe.tenant_not_found(tenant_id=target_tenant_id.value)
                        raise TenantNotFoundError(
                            f"Target tenant {target_tenant_id} not found"
                        )

                result = await self._apply_deletion(
                    tenant, disposition, target_tenant_id
                )
        except (NotFoundError, ValidationError):
            raise
        except Exception as e:
            self._probe.tenant_deletion_failed(tenant_id=tenant_id.value, error=str(e))
            raise TenantDeletionError(tenant_id.value, e) from e

        self._probe.tenant_deleted(
            tenant_id=tenant_id.value,
            disposition=disposition.value,
            agents_affected=result.agents_affected,
            dashboards_cleared=result.dashboards_cleared,
        )
        return result

    @staticmethod
    def _validate_disposition(
        tenant_id: TenantId,
        disposition: TenantDisposition,
        target_tenant_id: TenantId | None,
    ) -> None:
        if disposition == TenantDisposition.REASSIGN:
            if target_tenant_id is None:
                raise ValidationError(
                    "A target tenant is required to reassign agents"
                )
            if target_tenant_id == tenant_id:
                raise ValidationError(
                    "Agents cannot be reassigned to the tenant being deleted"
                )
        elif target_tenant_id is not None:
            raise ValidationError(
                "A target tenant is only accepted with the reassign action"
            )

    async def _apply_deletion(
        self,
        tenant: Tenant,
        disposition: TenantDisposition,
        target_tenant_id: TenantId | None,
    ) -> TenantDeletionResult:
        """Resolve agents, detach dashboards, then remove the tenant row.

        Runs inside the caller's transaction. Dashboards are loaded only after
        agents are handled so that memberships removed together with deleted
        agents are not written back.
        """
        agents = await self._agent_repository.list(TenantFilter.for_tenant(tenant.id))
        self._probe.tenant_deletion_started(
            tenant_id=tenant.id.value,
            disposition=disposition.value,
            agent_count=len(agents),
        )

        for agent in agents:
            if disposition == TenantDisposition.DELETE_AGENTS:
                await self._agent_repository.delete(agent)
            else:
                # target_tenant_id is None for MAKE_GENERAL
                agent.assign_tenant(target_tenant_id)
                await self._agent_repository.save(agent)

        dashboards = await self._dashboard_repository.list_by_tenant(tenant.id)
        for dashboard in dashboards:
            dashboard.assign_tenant(None)
            await self._dashboard_repository.save(dashboard)

        if not await self._tenant_repository.delete(tenant):
            raise TenantNotFoundError(f"Tenant {tenant.id} not found")

        return TenantDeletionResult(
            agents_affected=len(agents),
            dashboards_cleared=len(dashboards),
        )
