from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.observability import (
    AgentServiceProbe,
    DefaultAgentServiceProbe,
)
from catalog.application.services import AgentService, TenantResolver
from catalog.dependencies.tenant import get_tenant_resolver
from catalog.infrastructure.agent_repository import AgentRepository
from catalog.infrastructure.observability import DefaultAgentRepositoryProbe
from infrastructure.database.dependencies import get_session
from infrastructure.dependencies import get_observation_context
from shared_kernel.observability_context import ObservationContext


def get_agent_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AgentServiceProbe:
    """Get AgentServiceProbe instance bound to the request context.

    Returns:
        DefaultAgentServiceProbe instance for observability
    """
    return DefaultAgentServiceProbe().with_context(context)


def get_agent_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AgentRepository:
    """Get AgentRepository instance.

    Args:
        session: Async database session
        context: Observation context for the current request

    Returns:
        AgentRepository instance
    """
    return AgentRepository(
        session=session,
        probe=DefaultAgentRepositoryProbe().with_context(context),
    )


def get_agent_service(
    agent_repo: Annotated[AgentRepository, Depends(get_agent_repository)],
    tenant_resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[AgentServiceProbe, Depends(get_agent_service_probe)],
) -> AgentService:
    """Get AgentService instance.

    Args:
        agent_repo: Agent repository (shares session via FastAPI dependency caching)
        tenant_resolver: Resolver for the tenant chosen on the agent form
        session: Database session for transaction management
        probe: Agent service probe for observability

    Returns:
        AgentService instance
    """
    return AgentService(
        agent_repository=agent_repo,
        tenant_resolver=tenant_resolver,
        session=session,
        probe=probe,
    )
