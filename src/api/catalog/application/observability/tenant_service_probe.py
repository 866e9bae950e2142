"""Protocol for tenant application service observability.

Defines the interface for domain probes that capture application-level
domain events for tenant service operations, including tenant deletion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantServiceProbe(Protocol):
    """Domain probe for tenant application service operations."""

    def tenant_created(self, tenant_id: str, name: str) -> None:
        """Record that a tenant was created."""
        ...

    def tenant_renamed(self, tenant_id: str, name: str) -> None:
        """Record that a tenant was renamed."""
        ...

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        ...

    def tenants_listed(self, count: int) -> None:
        """Record that tenants were listed."""
        ...

    def tenant_not_found(self, tenant_id: str) -> None:
        """Record that a tenant was not found."""
        ...

    def duplicate_tenant_name(self, name: str) -> None:
        """Record that a duplicate tenant name was detected."""
        ...

    def inline_tenant_created(self, tenant_id: str, name: str) -> None:
        """Record that a tenant was created ahead of an agent/dashboard save.

        The tenant is committed on its own, so it remains even if the
        save that requested it fails afterwards.
        """
        ...

    def tenant_deletion_started(
        self,
        tenant_id: str,
        disposition: str,
        agent_count: int,
    ) -> None:
        """Record the scope of a tenant deletion before changes are applied."""
        ...

    def tenant_deleted(
        self,
        tenant_id: str,
        disposition: str,
        agents_affected: int,
        dashboards_cleared: int,
    ) -> None:
        """Record that a tenant was deleted and its dependents resolved."""
        ...

    def tenant_deletion_failed(self, tenant_id: str, error: str) -> None:
        """Record that a tenant deletion was rolled back."""
        ...

    def with_context(self, context: ObservationContext) -> TenantServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantServiceProbe:
    """Default implementation of TenantServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantServiceProbe(logger=self._logger, context=context)

    def tenant_created(self, tenant_id: str, name: str) -> None:
        """Record that a tenant was created."""
        self._logger.info(
            "tenant_created",
            tenant_id=tenant_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def tenant_renamed(self, tenant_id: str, name: str) -> None:
        """Record that a tenant was renamed."""
        self._logger.info(
            "tenant_renamed",
            tenant_id=tenant_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenants_listed(self, count: int) -> None:
        """Record that tenants were listed."""
        self._logger.debug(
            "tenants_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, tenant_id: str) -> None:
        """Record that a tenant was not found."""
        self._logger.debug(
            "tenant_not_found",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def duplicate_tenant_name(self, name: str) -> None:
        """Record that a duplicate tenant name was detected."""
        self._logger.warning(
            "duplicate_tenant_name",
            name=name,
            **self._get_context_kwargs(),
        )

    def inline_tenant_created(self, tenant_id: str, name: str) -> None:
        """Record that a tenant was created ahead of an agent/dashboard save."""
        self._logger.info(
            "inline_tenant_created",
            tenant_id=tenant_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def tenant_deletion_started(
        self,
        tenant_id: str,
        disposition: str,
        agent_count: int,
    ) -> None:
        """Record the scope of a tenant deletion before changes are applied."""
        self._logger.info(
            "tenant_deletion_started",
            tenant_id=tenant_id,
            disposition=disposition,
            agent_count=agent_count,
            **self._get_context_kwargs(),
        )

    def tenant_deleted(
        self,
        tenant_id: str,
        disposition: str,
        agents_affected: int,
        dashboards_cleared: int,
    ) -> None:
        """Record that a tenant was deleted and its dependents resolved."""
        self._logger.info(
            "tenant_deleted",
            tenant_id=tenant_id,
            disposition=disposition,
            agents_affected=agents_affected,
            dashboards_cleared=dashboards_cleared,
            **self._get_context_kwargs(),
        )

    def tenant_deletion_failed(self, tenant_id: str, error: str) -> None:
        """Record that a tenant deletion was rolled back."""
        self._logger.error(
            "tenant_deletion_failed",
            tenant_id=tenant_id,
            error=error,
            **self._get_context_kwargs(),
        )
