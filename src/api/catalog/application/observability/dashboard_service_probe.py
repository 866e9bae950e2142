"""Protocol for dashboard application service observability.

Covers dashboard CRUD and the membership operations that add, remove,
replace and reorder a dashboard's agents.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DashboardServiceProbe(Protocol):
    """Domain probe for dashboard application service operations."""

    def dashboard_created(
        self, dashboard_id: str, slug: str, tenant_id: str | None
    ) -> None:
        """Record that a dashboard was created."""
        ...

    def dashboard_updated(self, dashboard_id: str, fields: list[str]) -> None:
        """Record which fields of a dashboard were changed."""
        ...

    def dashboard_deleted(self, dashboard_id: str) -> None:
        """Record that a dashboard was deleted."""
        ...

    def dashboard_not_found(self, dashboard_id: str) -> None:
        """Record that a dashboard was not found."""
        ...

    def dashboards_listed(self, count: int, scope: str) -> None:
        """Record that dashboards were listed."""
        ...

    def membership_changed(
        self, dashboard_id: str, added: list[str], removed: list[str]
    ) -> None:
        """Record agents added to and removed from a dashboard."""
        ...

    def agents_reordered(self, dashboard_id: str, agent_count: int) -> None:
        """Record that a dashboard's agents were reordered."""
        ...

    def unknown_agents_requested(
        self, dashboard_id: str | None, agent_ids: list[str]
    ) -> None:
        """Record that a membership change referenced agents that do not exist."""
        ...

    def with_context(self, context: ObservationContext) -> DashboardServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDashboardServiceProbe:
    """Default implementation of DashboardServiceProbe using structlog."""

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
    ) -> DefaultDashboardServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultDashboardServiceProbe(logger=self._logger, context=context)

    def dashboard_created(
        self, dashboard_id: str, slug: str, tenant_id: str | None
    ) -> None:
        self._logger.info(
            "dashboard_created",
            dashboard_id=dashboard_id,
            slug=slug,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def dashboard_updated(self, dashboard_id: str, fields: list[str]) -> None:
        self._logger.info(
            "dashboard_updated",
            dashboard_id=dashboard_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def dashboard_deleted(self, dashboard_id: str) -> None:
        self._logger.info(
            "dashboard_deleted",
            dashboard_id=dashboard_id,
            **self._get_context_kwargs(),
        )

    def dashboard_not_found(self, dashboard_id: str) -> None:
        self._logger.debug(
            "dashboard_not_found",
            dashboard_id=dashboard_id,
            **self._get_context_kwargs(),
        )

    def dashboards_listed(self, count: int, scope: str) -> None:
        self._logger.debug(
            "dashboards_listed",
            count=count,
            scope=scope,
            **self._get_context_kwargs(),
        )

    def membership_changed(
        self, dashboard_id: str, added: list[str], removed: list[str]
    ) -> None:
        self._logger.info(
            "dashboard_membership_changed",
            dashboard_id=dashboard_id,
            added=added,
            removed=removed,
            **self._get_context_kwargs(),
        )

    def agents_reordered(self, dashboard_id: str, agent_count: int) -> None:
        self._logger.info(
            "dashboard_agents_reordered",
            dashboard_id=dashboard_id,
            agent_count=agent_count,
            **self._get_context_kwargs(),
        )

    def unknown_agents_requested(
        self, dashboard_id: str | None, agent_ids: list[str]
    ) -> None:
        self._logger.warning(
            "unknown_agents_requested",
            dashboard_id=dashboard_id,
            agent_ids=agent_ids,
            **self._get_context_kwargs(),
        )
