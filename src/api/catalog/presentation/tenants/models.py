"""Pydantic models for tenant API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from catalog.domain.aggregates import Tenant
from catalog.ports.read_models import TenantDeletionResult, TenantSummary


class CreateTenantRequest(BaseModel):
    """Request model for creating a tenant.

    Name rules (length, allowed characters) are enforced by the domain so
    that violations surface as 400 responses.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Tenant name", examples=["Acme Corp"])


class UpdateTenantRequest(BaseModel):
    """Request model for renaming a tenant."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="New tenant name")


class TenantResponse(BaseModel):
    """Response model for tenant."""

    id: str = Field(..., description="Tenant ID (ULID format)")
    name: str = Field(..., description="Tenant name")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_domain(cls, tenant: Tenant) -> TenantResponse:
        """Convert domain Tenant aggregate to API response.

        Args:
            tenant: Tenant domain aggregate

        Returns:
            TenantResponse
        """
        return cls(
            id=tenant.id.value,
            name=tenant.name,
            created_at=tenant.created_at,
            updated_at=tenant.updated_at,
        )


class TenantSummaryResponse(TenantResponse):
    """Tenant list entry with the number of agents assigned to it."""

    agent_count: int = Field(..., description="Number of agents in the tenant")

    @classmethod
    def from_summary(cls, summary: TenantSummary) -> TenantSummaryResponse:
        tenant = summary.tenant
        return cls(
            id=tenant.id.value,
            name=tenant.name,
            created_at=tenant.created_at,
            updated_at=tenant.updated_at,
            agent_count=summary.agent_count,
        )


class TenantDeletionResponse(BaseModel):
    """Outcome of a tenant deletion."""

    agents_affected: int = Field(
        ..., description="Agents moved, reassigned or deleted"
    )
    dashboards_cleared: int = Field(
        ..., description="Dashboards moved to General Purpose"
    )

    @classmethod
    def from_result(cls, result: TenantDeletionResult) -> TenantDeletionResponse:
        return cls(
            agents_affected=result.agents_affected,
            dashboards_cleared=result.dashboards_cleared,
        )
