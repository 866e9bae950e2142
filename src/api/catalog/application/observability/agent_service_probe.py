"""Protocol for agent application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AgentServiceProbe(Protocol):
    """Domain probe for agent application service operations."""

    def agent_created(
        self, agent_id: str, slug: str, tenant_id: str | None
    ) -> None:
        """Record that an agent was created."""
        ...

    def agent_updated(self, agent_id: str, fields: list[str]) -> None:
        """Record which fields of an agent were changed."""
        ...

    def agent_deleted(self, agent_id: str) -> None:
        """Record that an agent was deleted."""
        ...

    def agent_not_found(self, agent_id: str) -> None:
        """Record that an agent was not found."""
        ...

    def agents_listed(self, count: int, scope: str) -> None:
        """Record that agents were listed."""
        ...

    def with_context(self, context: ObservationContext) -> AgentServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAgentServiceProbe:
    """Default implementation of AgentServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAgentServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAgentServiceProbe(logger=self._logger, context=context)

    def agent_created(
        self, agent_id: str, slug: str, tenant_id: str | None
    ) -> None:
        self._logger.info(
            "agent_created",
            agent_id=agent_id,
            slug=slug,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def agent_updated(self, agent_id: str, fields: list[str]) -> None:
        self._logger.info(
            "agent_updated",
            agent_id=agent_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def agent_deleted(self, agent_id: str) -> None:
        self._logger.info(
            "agent_deleted",
            agent_id=agent_id,
            **self._get_context_kwargs(),
        )

    def agent_not_found(self, agent_id: str) -> None:
        self._logger.debug(
            "agent_not_found",
            agent_id=agent_id,
            **self._get_context_kwargs(),
        )

    def agents_listed(self, count: int, scope: str) -> None:
        self._logger.debug(
            "agents_listed",
            count=count,
            scope=scope,
            **self._get_context_kwargs(),
        )
