"""Agent aggregate for the catalog context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from catalog.domain.exceptions import ValidationError
from catalog.domain.value_objects import AgentId, Slug, TenantId

MAX_AGENT_FIELD_LENGTH = 255


@dataclass
class Agent:
    """Agent aggregate: a named reference to an externally hosted workflow.

    Business rules:
    - Name and workflow_id are required (non-blank, at most 255 characters)
    - The slug is generated at creation and never changes
    - tenant_id is optional; None places the agent in General Purpose
    """

    id: AgentId
    name: str
    slug: Slug
    workflow_id: str
    tenant_id: TenantId | None
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        self._validate_name(self.name)
        self._validate_workflow_id(self.workflow_id)

    @staticmethod
    def _validate_name(name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Agent name is required")
        if len(name.strip()) > MAX_AGENT_FIELD_LENGTH:
            raise ValidationError(
                f"Agent name must be at most {MAX_AGENT_FIELD_LENGTH} characters"
            )

    @staticmethod
    def _validate_workflow_id(workflow_id: str) -> None:
        if not workflow_id or not workflow_id.strip():
            raise ValidationError("Workflow ID is required")
        if len(workflow_id.strip()) > MAX_AGENT_FIELD_LENGTH:
            raise ValidationError(
                f"Workflow ID must be at most {MAX_AGENT_FIELD_LENGTH} characters"
            )

    @classmethod
    def create(
        cls,
        name: str,
        workflow_id: str,
        tenant_id: TenantId | None = None,
    ) -> Agent:
        """Factory method for creating a new agent with a generated slug.

        Args:
            name: Display name of the agent
            workflow_id: Opaque identifier of the hosted workflow
            tenant_id: Owning tenant, or None for General Purpose

        Returns:
            A new Agent aggregate

        Raises:
            ValidationError: If name or workflow_id is blank
        """
        now = datetime.now(UTC)
        return cls(
            id=AgentId.generate(),
            name=name.strip(),
            slug=Slug.generate(),
            workflow_id=workflow_id.strip(),
            tenant_id=tenant_id,
            created_at=now,
            updated_at=now,
        )

    def rename(self, name: str) -> None:
        self._validate_name(name)
        self.name = name.strip()
        self._touch()

    def change_workflow(self, workflow_id: str) -> None:
        self._validate_workflow_id(workflow_id)
        self.workflow_id = workflow_id.strip()
        self._touch()

    def assign_tenant(self, tenant_id: TenantId | None) -> None:
        """Move the agent to a tenant, or to General Purpose with None."""
        self.tenant_id = tenant_id
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(UTC)
