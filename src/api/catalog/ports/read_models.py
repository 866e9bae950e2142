"""Read models returned by catalog listing and detail queries.

These combine an aggregate with values computed by the store (counts,
denormalized tenant names) that are not part of the aggregate itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog.domain.aggregates import Agent, Dashboard, Tenant


@dataclass(frozen=True)
class TenantSummary:
    """A tenant with the number of agents assigned to it."""

    tenant: Tenant
    agent_count: int


@dataclass(frozen=True)
class DashboardSummary:
    """A dashboard with its tenant's name and its number of member agents."""

    dashboard: Dashboard
    tenant_name: str | None
    agent_count: int


@dataclass(frozen=True)
class DashboardAgentEntry:
    """A member agent as displayed on a dashboard."""

    agent: Agent
    tenant_name: str | None
    order: int


@dataclass(frozen=True)
class DashboardDetails:
    """A dashboard with its member agents in display order."""

    dashboard: Dashboard
    tenant_name: str | None
    agents: list[DashboardAgentEntry] = field(default_factory=list)


@dataclass(frozen=True)
class TenantDeletionResult:
    """Counts of rows touched while deleting a tenant."""

    agents_affected: int
    dashboards_cleared: int
