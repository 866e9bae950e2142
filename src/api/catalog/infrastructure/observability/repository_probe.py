"""Domain probes for catalog repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events related to tenant, agent and dashboard persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_saved(self, tenant_id: str) -> None:
        """Record that a tenant was successfully saved."""
        ...

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        ...

    def tenants_listed(self, count: int) -> None:
        """Record that tenants were listed."""
        ...

    def tenant_deleted(self, tenant_id: str) -> None:
        """Record that a tenant was deleted."""
        ...

    def duplicate_tenant_name(self, name: str) -> None:
        """Record that a duplicate tenant name was detected."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class AgentRepositoryProbe(Protocol):
    """Domain probe for agent repository operations."""

    def agent_saved(self, agent_id: str, slug: str) -> None:
        """Record that an agent was successfully saved."""
        ...

    def agents_listed(self, count: int) -> None:
        """Record that agents were listed."""
        ...

    def agent_deleted(self, agent_id: str) -> None:
        """Record that an agent was deleted."""
        ...

    def duplicate_slug(self, slug: str) -> None:
        """Record that a generated agent slug collided with an existing one."""
        ...

    def with_context(self, context: ObservationContext) -> AgentRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DashboardRepositoryProbe(Protocol):
    """Domain probe for dashboard repository operations."""

    def dashboard_saved(self, dashboard_id: str, member_count: int) -> None:
        """Record that a dashboard and its memberships were saved."""
        ...

    def dashboards_listed(self, count: int) -> None:
        """Record that dashboards were listed."""
        ...

    def dashboard_deleted(self, dashboard_id: str) -> None:
        """Record that a dashboard was deleted."""
        ...

    def duplicate_slug(self, slug: str) -> None:
        """Record that a generated dashboard slug collided with an existing one."""
        ...

    def duplicate_membership(self, dashboard_id: str) -> None:
        """Record that a membership row was inserted concurrently by another writer."""
        ...

    def with_context(self, context: ObservationContext) -> DashboardRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRepositoryProbe:
    """Default implementation of TenantRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_saved(self, tenant_id: str) -> None:
        self._logger.info(
            "tenant_saved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_retrieved(self, tenant_id: str) -> None:
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenants_listed(self, count: int) -> None:
        self._logger.debug(
            "tenants_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def tenant_deleted(self, tenant_id: str) -> None:
        self._logger.info(
            "tenant_deleted",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def duplicate_tenant_name(self, name: str) -> None:
        self._logger.warning(
            "duplicate_tenant_name",
            name=name,
            **self._get_context_kwargs(),
        )


class DefaultAgentRepositoryProbe:
    """Default implementation of AgentRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAgentRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultAgentRepositoryProbe(logger=self._logger, context=context)

    def agent_saved(self, agent_id: str, slug: str) -> None:
        self._logger.info(
            "agent_saved",
            agent_id=agent_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def agents_listed(self, count: int) -> None:
        self._logger.debug(
            "agents_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def agent_deleted(self, agent_id: str) -> None:
        self._logger.info(
            "agent_deleted",
            agent_id=agent_id,
            **self._get_context_kwargs(),
        )

    def duplicate_slug(self, slug: str) -> None:
        self._logger.warning(
            "duplicate_agent_slug",
            slug=slug,
            **self._get_context_kwargs(),
        )


class DefaultDashboardRepositoryProbe:
    """Default implementation of DashboardRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultDashboardRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultDashboardRepositoryProbe(logger=self._logger, context=context)

    def dashboard_saved(self, dashboard_id: str, member_count: int) -> None:
        self._logger.info(
            "dashboard_saved",
            dashboard_id=dashboard_id,
            member_count=member_count,
            **self._get_context_kwargs(),
        )

    def dashboards_listed(self, count: int) -> None:
        self._logger.debug(
            "dashboards_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def dashboard_deleted(self, dashboard_id: str) -> None:
        self._logger.info(
            "dashboard_deleted",
            dashboard_id=dashboard_id,
            **self._get_context_kwargs(),
        )

    def duplicate_slug(self, slug: str) -> None:
        self._logger.warning(
            "duplicate_dashboard_slug",
            slug=slug,
            **self._get_context_kwargs(),
        )

    def duplicate_membership(self, dashboard_id: str) -> None:
        self._logger.warning(
            "duplicate_dashboard_membership",
            dashboard_id=dashboard_id,
            **self._get_context_kwargs(),
        )
