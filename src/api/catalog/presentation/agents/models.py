"""Pydantic models for agent API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from catalog.domain.aggregates import Agent
from catalog.presentation.models import TenantSelection


class CreateAgentRequest(TenantSelection):
    """Request model for creating an agent.

    The slug is generated by the server and cannot be supplied.
    """

    name: str = Field(..., description="Agent display name", examples=["Support Bot"])
    workflow_id: str = Field(
        ..., description="Identifier of the hosted chat workflow"
    )


class UpdateAgentRequest(TenantSelection):
    """Request model for a partial agent update.

    Omitted fields are left unchanged. Send ``"tenant_id": null`` to move the
    agent to General Purpose.
    """

    name: str | None = Field(default=None, description="New display name")
    workflow_id: str | None = Field(default=None, description="New workflow ID")


class AgentResponse(BaseModel):
    """Response model for agent."""

    id: str = Field(..., description="Agent ID (ULID format)")
    name: str = Field(..., description="Agent display name")
    slug: str = Field(..., description="Public slug used in embed URLs")
    workflow_id: str = Field(..., description="Hosted chat workflow ID")
    tenant_id: str | None = Field(
        ..., description="Tenant ID, or None for General Purpose"
    )
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_domain(cls, agent: Agent) -> AgentResponse:
        """Convert domain Agent aggregate to API response.

        Args:
            agent: Agent domain aggregate

        Returns:
            AgentResponse
        """
        return cls(
            id=agent.id.value,
            name=agent.name,
            slug=agent.slug.value,
            workflow_id=agent.workflow_id,
            tenant_id=agent.tenant_id.value if agent.tenant_id else None,
            created_at=agent.created_at,
            updated_at=agent.updated_at,
        )
