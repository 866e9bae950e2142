"""SQLAlchemy implementation of IAgentRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.domain.aggregates import Agent
from catalog.domain.value_objects import (
    AgentId,
    Slug,
    TenantFilter,
    TenantId,
    TenantScope,
)
from catalog.infrastructure.models import AgentModel
from catalog.infrastructure.observability import (
    AgentRepositoryProbe,
    DefaultAgentRepositoryProbe,
)
from catalog.ports.exceptions import DuplicateSlugError
from catalog.ports.repositories import IAgentRepository


def _is_duplicate_slug(error: IntegrityError) -> bool:
    message = str(error.orig)
    return "ix_agents_slug" in message or "agents.slug" in message


def agent_to_domain(model: AgentModel) -> Agent:
    """Reconstitute an Agent aggregate from its row."""
    return Agent(
        id=AgentId(value=model.id),
        name=model.name,
        slug=Slug(value=model.slug),
        workflow_id=model.workflow_id,
        tenant_id=TenantId(value=model.tenant_id) if model.tenant_id else None,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class AgentRepository(IAgentRepository):
    """Repository managing storage for Agent aggregates.

    Deleting an agent relies on the dashboard_agents foreign key cascade to
    drop its memberships.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: AgentRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultAgentRepositoryProbe()

    async def save(self, agent: Agent) -> None:
        """Insert or update an agent.

        Args:
            agent: The Agent aggregate to persist

        Raises:
            DuplicateSlugError: If another agent already has this slug
        """
        try:
            model = await self._session.get(AgentModel, agent.id.value)

            if model:
                model.name = agent.name
                model.workflow_id = agent.workflow_id
                model.tenant_id = agent.tenant_id.value if agent.tenant_id else None
                model.updated_at = agent.updated_at
            else:
                model = AgentModel(
                    id=agent.id.value,
                    name=agent.name,
                    slug=agent.slug.value,
                    workflow_id=agent.workflow_id,
                    tenant_id=agent.tenant_id.value if agent.tenant_id else None,
                    created_at=agent.created_at,
                    updated_at=agent.updated_at,
                )
                self._session.add(model)

            await self._session.flush()

        except IntegrityError as e:
            if _is_duplicate_slug(e):
                self._probe.duplicate_slug(agent.slug.value)
                raise DuplicateSlugError(
                    f"Agent slug '{agent.slug.value}' is already taken"
                ) from e
            raise

        self._probe.agent_saved(agent.id.value, agent.slug.value)

    async def get_by_id(self, agent_id: AgentId) -> Agent | None:
        model = await self._session.get(AgentModel, agent_id.value)
        if model is None:
            return None
        return agent_to_domain(model)

    async def get_by_slug(self, slug: str) -> Agent | None:
        stmt = select(AgentModel).where(AgentModel.slug == slug)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None
        return agent_to_domain(model)

    async def get_many(self, agent_ids: list[AgentId]) -> list[Agent]:
        """Fetch the agents that exist among the given IDs."""
        if not agent_ids:
            return []

        stmt = select(AgentModel).where(
            AgentModel.id.in_([agent_id.value for agent_id in agent_ids])
        )
        result = await self._session.execute(stmt)
        return [agent_to_domain(model) for model in result.scalars().all()]

    async def list(self, tenant_filter: TenantFilter) -> list[Agent]:
        """Fetch agents matching the tenant filter, newest first.

        Args:
            tenant_filter: Which agents to include

        Returns:
            List of Agent aggregates
        """
        stmt = select(AgentModel).order_by(AgentModel.created_at.desc())

        if tenant_filter.scope == TenantScope.GENERAL:
            stmt = stmt.where(AgentModel.tenant_id.is_(None))
        elif tenant_filter.scope == TenantScope.TENANT:
            assert tenant_filter.tenant_id is not None
            stmt = stmt.where(AgentModel.tenant_id == tenant_filter.tenant_id.value)

        result = await self._session.execute(stmt)
        agents = [agent_to_domain(model) for model in result.scalars().all()]

        self._probe.agents_listed(len(agents))
        return agents

    async def list_by_workflow_ids(self, workflow_ids: list[str]) -> list[Agent]:
        """Fetch agents whose workflow ID is in the list, oldest first."""
        if not workflow_ids:
            return []

        stmt = (
            select(AgentModel)
            .where(AgentModel.workflow_id.in_(workflow_ids))
            .order_by(AgentModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [agent_to_domain(model) for model in result.scalars().all()]

    async def delete(self, agent: Agent) -> bool:
        """Delete an agent row.

        Returns:
            True if deleted, False if not found
        """
        model = await self._session.get(AgentModel, agent.id.value)
        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.agent_deleted(agent.id.value)
        return True

