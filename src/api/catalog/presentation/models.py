"""Request pieces shared by the agent and dashboard endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from catalog.domain.value_objects import (
    AgentId,
    ExistingTenant,
    NewTenantName,
    NoTenant,
    TenantChoice,
    TenantId,
)


class TenantSelection(BaseModel):
    """Tenant fields accepted on agent and dashboard forms.

    Exactly one of three intents is expressed:
    - ``tenant_id`` with an ID: place the item under that tenant
    - ``tenant_id`` explicitly null: General Purpose (no tenant)
    - ``new_tenant_name``: create a tenant with this name and use it

    Leaving both fields out means "no change" on updates and General
    Purpose on creates.
    """

    model_config = ConfigDict(extra="forbid")

    tenant_id: str | None = Field(
        default=None,
        description="Tenant ID (ULID format), or null for General Purpose",
    )
    new_tenant_name: str | None = Field(
        default=None,
        description="Name of a tenant to create and assign",
    )

    def tenant_choice(self) -> TenantChoice | None:
        """Convert the tenant fields to a domain TenantChoice.

        Returns:
            The chosen TenantChoice, or None if neither field was sent

        Raises:
            ValueError: If both fields are given or tenant_id is not a ULID
        """
        if self.new_tenant_name is not None:
            if self.tenant_id is not None:
                raise ValueError("Provide either tenant_id or new_tenant_name, not both")
            return NewTenantName(name=self.new_tenant_name)

        if "tenant_id" not in self.model_fields_set:
            return None
        if self.tenant_id is None:
            return NoTenant()
        return ExistingTenant(tenant_id=TenantId.from_string(self.tenant_id))


class AgentIdsRequest(BaseModel):
    """Request model carrying an ordered list of agent IDs."""

    model_config = ConfigDict(extra="forbid")

    agent_ids: list[str] = Field(..., description="Agent IDs (ULID format)")

    def to_domain_ids(self) -> list[AgentId]:
        return parse_agent_ids(self.agent_ids)


def parse_agent_ids(values: list[str]) -> list[AgentId]:
    """Parse agent ID strings.

    Raises:
        ValueError: If any value is not a valid ULID
    """
    return [AgentId.from_string(value) for value in values]
