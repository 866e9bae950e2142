"""Pydantic models for dashboard API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from catalog.domain.aggregates import Dashboard
from catalog.domain.value_objects import AgentId
from catalog.ports.read_models import (
    DashboardAgentEntry,
    DashboardDetails,
    DashboardSummary,
)
from catalog.presentation.models import TenantSelection, parse_agent_ids


class CreateDashboardRequest(TenantSelection):
    """Request model for creating a dashboard with optional initial agents."""

    title: str = Field(..., description="Dashboard title", examples=["Support"])
    agent_ids: list[str] = Field(
        default_factory=list,
        description="Initial agent IDs in display order",
    )

    def to_domain_agent_ids(self) -> list[AgentId]:
        return parse_agent_ids(self.agent_ids)


class UpdateDashboardRequest(TenantSelection):
    """Request model for a partial dashboard update.

    When ``agent_ids`` is given it replaces the dashboard's membership:
    agents that stay keep their position and new ones are appended.
    """

    title: str | None = Field(default=None, description="New title")
    agent_ids: list[str] | None = Field(
        default=None, description="Complete new set of agent IDs"
    )

    def to_domain_agent_ids(self) -> list[AgentId] | None:
        if self.agent_ids is None:
            return None
        return parse_agent_ids(self.agent_ids)


class DashboardResponse(BaseModel):
    """Response model for dashboard."""

    id: str = Field(..., description="Dashboard ID (ULID format)")
    title: str = Field(..., description="Dashboard title")
    slug: str = Field(..., description="Public slug used in embed URLs")
    tenant_id: str | None = Field(
        ..., description="Tenant ID, or None for General Purpose"
    )
    agent_ids: list[str] = Field(..., description="Member agent IDs in order")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_domain(cls, dashboard: Dashboard) -> DashboardResponse:
        """Convert domain Dashboard aggregate to API response.

        Args:
            dashboard: Dashboard domain aggregate

        Returns:
            DashboardResponse
        """
        return cls(
            id=dashboard.id.value,
            title=dashboard.title,
            slug=dashboard.slug.value,
            tenant_id=dashboard.tenant_id.value if dashboard.tenant_id else None,
            agent_ids=[a.value for a in dashboard.agent_ids],
            created_at=dashboard.created_at,
            updated_at=dashboard.updated_at,
        )


class DashboardSummaryResponse(BaseModel):
    """Dashboard list entry."""

    id: str
    title: str
    slug: str
    tenant_id: str | None
    tenant_name: str | None = Field(..., description="Tenant name, if any")
    agent_count: int = Field(..., description="Number of member agents")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> DashboardSummaryResponse:
        dashboard = summary.dashboard
        return cls(
            id=dashboard.id.value,
            title=dashboard.title,
            slug=dashboard.slug.value,
            tenant_id=dashboard.tenant_id.value if dashboard.tenant_id else None,
            tenant_name=summary.tenant_name,
            agent_count=summary.agent_count,
            created_at=dashboard.created_at,
            updated_at=dashboard.updated_at,
        )


class DashboardAgentResponse(BaseModel):
    """A member agent as shown on the dashboard detail page."""

    id: str
    name: str
    slug: str
    workflow_id: str
    tenant_id: str | None
    tenant_name: str | None = Field(..., description="The agent's tenant name")
    order: int = Field(..., description="Display position, ascending")

    @classmethod
    def from_entry(cls, entry: DashboardAgentEntry) -> DashboardAgentResponse:
        agent = entry.agent
        return cls(
            id=agent.id.value,
            name=agent.name,
            slug=agent.slug.value,
            workflow_id=agent.workflow_id,
            tenant_id=agent.tenant_id.value if agent.tenant_id else None,
            tenant_name=entry.tenant_name,
            order=entry.order,
        )


class DashboardDetailResponse(BaseModel):
    """A dashboard with its member agents in display order."""

    id: str
    title: str
    slug: str
    tenant_id: str | None
    tenant_name: str | None
    agents: list[DashboardAgentResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_details(cls, details: DashboardDetails) -> DashboardDetailResponse:
        dashboard = details.dashboard
        return cls(
            id=dashboard.id.value,
            title=dashboard.title,
            slug=dashboard.slug.value,
            tenant_id=dashboard.tenant_id.value if dashboard.tenant_id else None,
            tenant_name=details.tenant_name,
            agents=[DashboardAgentResponse.from_entry(e) for e in details.agents],
            created_at=dashboard.created_at,
            updated_at=dashboard.updated_at,
        )
