"""Protocol for embed service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class EmbedServiceProbe(Protocol):
    """Domain probe for public embed lookups."""

    def agent_resolved(self, slug: str, workflow_id: str) -> None:
        """Record that an agent embed was served."""
        ...

    def agent_not_found(self, slug: str) -> None:
        """Record that an agent slug did not resolve."""
        ...

    def dashboard_resolved(self, slug: str, source: str, agent_count: int) -> None:
        """Record which source served a dashboard embed."""
        ...

    def dashboard_not_found(self, slug: str) -> None:
        """Record that no resolver knew a dashboard slug."""
        ...

    def dashboard_agent_not_found(self, dashboard_slug: str, agent_slug: str) -> None:
        """Record that an agent is not on the requested dashboard."""
        ...

    def with_context(self, context: ObservationContext) -> EmbedServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEmbedServiceProbe:
    """Default implementation of EmbedServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultEmbedServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultEmbedServiceProbe(logger=self._logger, context=context)

    def agent_resolved(self, slug: str, workflow_id: str) -> None:
        self._logger.debug(
            "embed_agent_resolved",
            slug=slug,
            workflow_id=workflow_id,
            **self._get_context_kwargs(),
        )

    def agent_not_found(self, slug: str) -> None:
        self._logger.info(
            "embed_agent_not_found",
            slug=slug,
            **self._get_context_kwargs(),
        )

    def dashboard_resolved(self, slug: str, source: str, agent_count: int) -> None:
        self._logger.debug(
            "dashboard_resolved",
            slug=slug,
            source=source,
            agent_count=agent_count,
            **self._get_context_kwargs(),
        )

    def dashboard_not_found(self, slug: str) -> None:
        self._logger.info(
            "embed_dashboard_not_found",
            slug=slug,
            **self._get_context_kwargs(),
        )

    def dashboard_agent_not_found(self, dashboard_slug: str, agent_slug: str) -> None:
        self._logger.info(
            "embed_dashboard_agent_not_found",
            dashboard_slug=dashboard_slug,
            agent_slug=agent_slug,
            **self._get_context_kwargs(),
        )
