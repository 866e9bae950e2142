"""Resolution of tenant choices made while saving agents and dashboards.

Agent and dashboard forms let the user pick an existing tenant, type the
name of a new one, or choose none. A new tenant is created and committed in
its own transaction before the agent/dashboard save starts. If that save
then fails, the new tenant stays behind unused, which is accepted since
tenants are shared and not owned by the item that prompted them.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from catalog.domain.aggregates import Tenant
from catalog.domain.value_objects import (
    ExistingTenant,
    NewTenantName,
    TenantChoice,
    TenantId,
)
from catalog.ports.exceptions import DuplicateTenantNameError, TenantNotFoundError
from catalog.ports.repositories import ITenantRepository


class TenantResolver:
    """Turns a TenantChoice into the tenant ID to store on an agent or dashboard."""

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        session: AsyncSession,
        probe: TenantServiceProbe | None = None,
    ):
        self._tenant_repository = tenant_repository
        self._session = session
        self._probe = probe or DefaultTenantServiceProbe()

    async def create_if_new(self, choice: TenantChoice) -> TenantChoice:
        """Create the tenant for a NewTenantName choice.

        Must be called outside any open transaction; the tenant is committed
        before this returns.

        Args:
            choice: The caller's tenant choice

        Returns:
            ExistingTenant pointing at the created tenant for a NewTenantName,
            otherwise the choice unchanged

        Raises:
            InvalidTenantNameError: If the new name breaks the naming rules
            DuplicateTenantNameError: If a tenant with the name already exists
        """
        if not isinstance(choice, NewTenantName):
            return choice

        tenant = Tenant.create(name=choice.name)
        async with self._session.begin():
            try:
                await self._tenant_repository.save(tenant)
            except DuplicateTenantNameError:
                self._probe.duplicate_tenant_name(name=tenant.name)
                raise

        self._probe.inline_tenant_created(tenant_id=tenant.id.value, name=tenant.name)
        return ExistingTenant(tenant_id=tenant.id)

    async def tenant_id_for(self, choice: TenantChoice) -> TenantId | None:
        """Return the tenant ID a choice refers to.

        Must be called inside the caller's transaction so the existence
        check and the write that depends on it see the same state.

        Raises:
            TenantNotFoundError: If an ExistingTenant choice refers to a
                tenant that does not exist
            ValueError: If called with a NewTenantName that was not passed
                through create_if_new first
        """
        if isinstance(choice, NewTenantName):
            raise ValueError("New tenant names must be created before use")
        if not isinstance(choice, ExistingTenant):
            return None

        tenant = await self._tenant_repository.get_by_id(choice.tenant_id)
        if tenant is None:
            self._probe.tenant_not_found(tenant_id=choice.tenant_id.value)
            raise TenantNotFoundError(f"Tenant {choice.tenant_id} not found")
        return tenant.id
