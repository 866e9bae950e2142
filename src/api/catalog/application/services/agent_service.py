"""Agent application service for the catalog bounded context."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.observability import (
    AgentServiceProbe,
    DefaultAgentServiceProbe,
)
from catalog.application.services.tenant_resolver import TenantResolver
from catalog.domain.aggregates import Agent
from catalog.domain.exceptions import ValidationError
from catalog.domain.value_objects import AgentId, NoTenant, TenantChoice, TenantFilter
from catalog.ports.exceptions import AgentNotFoundError
from catalog.ports.repositories import IAgentRepository


class AgentService:
    """Application service for agent management.

    Agents may be placed under an existing tenant, a tenant created on the
    fly from a typed name, or no tenant at all (General Purpose).
    """

    def __init__(
        self,
        agent_repository: IAgentRepository,
        tenant_resolver: TenantResolver,
        session: AsyncSession,
        probe: AgentServiceProbe | None = None,
    ):
        """Initialize AgentService with dependencies.

        Args:
            agent_repository: Repository for agent persistence
            tenant_resolver: Resolves tenant choices, creating new tenants
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._agent_repository = agent_repository
        self._tenant_resolver = tenant_resolver
        self._session = session
        self._probe = probe or DefaultAgentServiceProbe()

    async def create_agent(
        self,
        name: str,
        workflow_id: str,
        tenant: TenantChoice = NoTenant(),
    ) -> Agent:
        """Create an agent with a generated slug.

        Args:
            name: Display name
            workflow_id: Identifier of the hosted workflow the agent opens
            tenant: Existing tenant, new tenant name, or no tenant

        Returns:
            The created Agent aggregate

        Raises:
            ValidationError: If name or workflow_id is blank, or a new
                tenant name breaks the naming rules
            TenantNotFoundError: If an existing tenant choice does not exist
            DuplicateTenantNameError: If a new tenant name is already taken
            DuplicateSlugError: If the generated slug collides
        """
        # Validate before any inline tenant gets created
        agent = Agent.create(name=name, workflow_id=workflow_id)
        choice = await self._tenant_resolver.create_if_new(tenant)

        async with self._session.begin():
            agent.assign_tenant(await self._tenant_resolver.tenant_id_for(choice))
            await self._agent_repository.save(agent)

        self._probe.agent_created(
            agent_id=agent.id.value,
            slug=agent.slug.value,
            tenant_id=agent.tenant_id.value if agent.tenant_id else None,
        )
        return agent

    async def get_agent(self, agent_id: AgentId) -> Agent:
        """Retrieve an agent by ID.

        Raises:
            AgentNotFoundError: If the agent does not exist
        """
        async with self._session.begin():
            agent = await self._agent_repository.get_by_id(agent_id)

        if agent is None:
            self._probe.agent_not_found(agent_id=agent_id.value)
            raise AgentNotFoundError(f"Agent {agent_id} not found")
        return agent

    async def update_agent(
        self,
        agent_id: AgentId,
        name: str | None = None,
        workflow_id: str | None = None,
        tenant: TenantChoice | None = None,
    ) -> Agent:
        """Apply a partial update to an agent.

        Only arguments that are not None are applied. Pass ``NoTenant()``
        to move the agent to General Purpose. The slug cannot be changed.

        Args:
            agent_id: The agent to update
            name: New display name
            workflow_id: New workflow identifier
            tenant: New tenant choice

        Returns:
            The updated Agent aggregate

        Raises:
            ValidationError: If no field is given or a given value is invalid
            AgentNotFoundError: If the agent does not exist
            TenantNotFoundError: If an existing tenant choice does not exist
            DuplicateTenantNameError: If a new tenant name is already taken
        """
        if name is None and workflow_id is None and tenant is None:
            raise ValidationError("At least one field must be provided for update")

        choice = (
            await self._tenant_resolver.create_if_new(tenant)
            if tenant is not None
            else None
        )

        changed: list[str] = []
        async with self._session.begin():
            agent = await self._agent_repository.get_by_id(agent_id)
            if agent is None:
                self._probe.agent_not_found(agent_id=agent_id.value)
                raise AgentNotFoundError(f"Agent {agent_id} not found")

            if name is not None:
                agent.rename(name)
                changed.append("name")
            if workflow_id is not None:
                agent.change_workflow(workflow_id)
                changed.append("workflow_id")
            if choice is not None:
                agent.assign_tenant(await self._tenant_resolver.tenant_id_for(choice))
                changed.append("tenant_id")

            await self._agent_repository.save(agent)

        self._probe.agent_updated(agent_id=agent_id.value, fields=changed)
        return agent

    async def delete_agent(self, agent_id: AgentId) -> None:
        """Delete an agent and its dashboard memberships.

        Raises:
            AgentNotFoundError: If the agent does not exist
        """
        async with self._session.begin():
            agent = await self._agent_repository.get_by_id(agent_id)
            if agent is None:
                self._probe.agent_not_found(agent_id=agent_id.value)
                raise AgentNotFoundError(f"Agent {agent_id} not found")

            await self._agent_repository.delete(agent)

        self._probe.agent_deleted(agent_id=agent_id.value)

    async def list_agents(
        self, tenant_filter: TenantFilter = TenantFilter()
    ) -> list[Agent]:
        """List agents, newest first.

        Args:
            tenant_filter: All agents (default), General Purpose agents only,
                or one tenant's agents

        Returns:
            List of Agent aggregates
        """
        async with self._session.begin():
            agents = await self._agent_repository.list(tenant_filter)

        self._probe.agents_listed(count=len(agents), scope=tenant_filter.scope.value)
        return agents
