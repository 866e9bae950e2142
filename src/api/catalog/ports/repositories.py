"""Repository protocols (ports) for the catalog bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations must enforce uniqueness with store constraints
and translate violations into the conflict errors in catalog.ports.exceptions.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from catalog.domain.aggregates import Agent, Dashboard, Tenant
from catalog.domain.value_objects import (
    AgentId,
    DashboardId,
    TenantFilter,
    TenantId,
)
from catalog.ports.read_models import (
    DashboardAgentEntry,
    DashboardSummary,
    TenantSummary,
)


@runtime_checkable
class ITenantRepository(Protocol):
    """Repository for Tenant aggregate persistence."""

    async def save(self, tenant: Tenant) -> None:
        """Persist a tenant aggregate.

        Creates a new tenant or updates an existing one.

        Args:
            tenant: The Tenant aggregate to persist

        Raises:
            DuplicateTenantNameError: If another tenant already has this name
        """
        ...

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a tenant by its ID.

        Args:
            tenant_id: The unique identifier of the tenant

        Returns:
            The Tenant aggregate, or None if not found
        """
        ...

    async def get_by_name(self, name: str) -> Tenant | None:
        """Retrieve a tenant by its exact (case-sensitive) name.

        Args:
            name: The tenant name

        Returns:
            The Tenant aggregate, or None if not found
        """
        ...

    async def list_with_agent_counts(self) -> list[TenantSummary]:
        """List all tenants, newest first, with their agent counts.

        Returns:
            List of TenantSummary entries
        """
        ...

    async def delete(self, tenant: Tenant) -> bool:
        """Delete a tenant row.

        Callers must first move or delete the tenant's agents and clear its
        dashboards; the store rejects deleting a referenced tenant.

        Args:
            tenant: The Tenant aggregate to delete

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IAgentRepository(Protocol):
    """Repository for Agent aggregate persistence."""

    async def save(self, agent: Agent) -> None:
        """Persist an agent aggregate.

        Args:
            agent: The Agent aggregate to persist

        Raises:
            DuplicateSlugError: If another agent already has this slug
        """
        ...

    async def get_by_id(self, agent_id: AgentId) -> Agent | None:
        """Retrieve an agent by its ID."""
        ...

    async def get_by_slug(self, slug: str) -> Agent | None:
        """Retrieve an agent by its public slug."""
        ...

    async def get_many(self, agent_ids: list[AgentId]) -> list[Agent]:
        """Retrieve the agents that exist among the given IDs.

        Args:
            agent_ids: IDs to look up

        Returns:
            The agents found, in no particular order. Missing IDs are
            simply absent from the result.
        """
        ...

    async def list(self, tenant_filter: TenantFilter) -> list[Agent]:
        """List agents matching the tenant filter, newest first.

        Args:
            tenant_filter: all agents, General Purpose agents, or one tenant's

        Returns:
            List of Agent aggregates
        """
        ...

    async def list_by_workflow_ids(self, workflow_ids: list[str]) -> list[Agent]:
        """List agents whose workflow ID is in the given list."""
        ...

    async def delete(self, agent: Agent) -> bool:
        """Delete an agent. Its dashboard memberships are removed with it.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IDashboardRepository(Protocol):
    """Repository for Dashboard aggregate persistence.

    Dashboards are loaded and saved together with their memberships.
    """

    async def save(self, dashboard: Dashboard) -> None:
        """Persist a dashboard and bring its membership rows in line.

        Membership rows missing from the aggregate are deleted, new ones
        inserted and changed orders updated.

        Args:
            dashboard: The Dashboard aggregate to persist

        Raises:
            DuplicateSlugError: If another dashboard already has this slug
        """
        ...

    async def get_by_id(self, dashboard_id: DashboardId) -> Dashboard | None:
        """Retrieve a dashboard with its memberships by ID."""
        ...

    async def get_by_slug(self, slug: str) -> Dashboard | None:
        """Retrieve a dashboard with its memberships by public slug."""
        ...

    async def list_summaries(
        self, tenant_filter: TenantFilter
    ) -> list[DashboardSummary]:
        """List dashboards matching the filter, newest first.

        Each entry carries the dashboard's tenant name and member count.
        """
        ...

    async def list_by_tenant(self, tenant_id: TenantId) -> list[Dashboard]:
        """List all dashboards scoped to a tenant."""
        ...

    async def list_member_agents(
        self, dashboard_id: DashboardId
    ) -> list[DashboardAgentEntry]:
        """List a dashboard's member agents by ascending order.

        Each entry includes the agent's own tenant name.
        """
        ...

    async def delete(self, dashboard: Dashboard) -> bool:
        """Delete a dashboard and its memberships.

        Returns:
            True if deleted, False if not found
        """
        ...
