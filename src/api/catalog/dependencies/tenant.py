from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from catalog.application.services import TenantResolver, TenantService
from catalog.infrastructure.agent_repository import AgentRepository
from catalog.infrastructure.dashboard_repository import DashboardRepository
from catalog.infrastructure.observability import DefaultTenantRepositoryProbe
from catalog.infrastructure.tenant_repository import TenantRepository
from infrastructure.database.dependencies import get_session
from infrastructure.dependencies import get_observation_context
from shared_kernel.observability_context import ObservationContext


def get_tenant_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> TenantServiceProbe:
    """Get TenantServiceProbe instance bound to the request context.

    Returns:
        DefaultTenantServiceProbe instance for observability
    """
    return DefaultTenantServiceProbe().with_context(context)


def get_tenant_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> TenantRepository:
    """Get TenantRepository instance.

    Args:
        session: Async database session
        context: Observation context for the current request

    Returns:
        TenantRepository instance
    """
    return TenantRepository(
        session=session,
        probe=DefaultTenantRepositoryProbe().with_context(context),
    )


def get_tenant_resolver(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[TenantServiceProbe, Depends(get_tenant_service_probe)],
) -> TenantResolver:
    """Get TenantResolver instance for agent and dashboard services.

    Args:
        tenant_repo: Tenant repository (shares session via FastAPI dependency caching)
        session: Database session used for inline tenant creation
        probe: Tenant service probe for observability

    Returns:
        TenantResolver instance
    """
    return TenantResolver(tenant_repository=tenant_repo, session=session, probe=probe)


def _get_agent_repository_for_tenant_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AgentRepository:
    """Get AgentRepository for TenantService (breaks circular import)."""
    # Import here to avoid circular dependency
    from catalog.dependencies.agent import get_agent_repository

    return get_agent_repository(session=session, context=context)


def _get_dashboard_repository_for_tenant_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> DashboardRepository:
    """Get DashboardRepository for TenantService (breaks circular import)."""
    # Import here to avoid circular dependency
    from catalog.dependencies.dashboard import get_dashboard_repository

    return get_dashboard_repository(session=session, context=context)


def get_tenant_service(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    agent_repo: Annotated[
        AgentRepository, Depends(_get_agent_repository_for_tenant_service)
    ],
    dashboard_repo: Annotated[
        DashboardRepository, Depends(_get_dashboard_repository_for_tenant_service)
    ],
    session: Annotated[AsyncSession, Depends(get_session)],
    tenant_service_probe: Annotated[
        TenantServiceProbe, Depends(get_tenant_service_probe)
    ],
) -> TenantService:
    """Get TenantService instance.

    Args:
        tenant_repo: Tenant repository (shares session via FastAPI dependency caching)
        agent_repo: Agent repository for tenant deletion
        dashboard_repo: Dashboard repository for tenant deletion
        session: Database session for transaction management
        tenant_service_probe: Tenant service probe for observability

    Returns:
        TenantService instance
    """
    return TenantService(
        tenant_repository=tenant_repo,
        agent_repository=agent_repo,
        dashboard_repository=dashboard_repo,
        session=session,
        probe=tenant_service_probe,
    )
