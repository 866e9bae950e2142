from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.observability import (
    DashboardServiceProbe,
    DefaultDashboardServiceProbe,
)
from catalog.application.services import DashboardService, TenantResolver
from catalog.dependencies.agent import get_agent_repository
from catalog.dependencies.tenant import get_tenant_repository, get_tenant_resolver
from catalog.infrastructure.agent_repository import AgentRepository
from catalog.infrastructure.dashboard_repository import DashboardRepository
from catalog.infrastructure.observability import DefaultDashboardRepositoryProbe
from catalog.infrastructure.tenant_repository import TenantRepository
from infrastructure.database.dependencies import get_session
from infrastructure.dependencies import get_observation_context
from shared_kernel.observability_context import ObservationContext


def get_dashboard_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> DashboardServiceProbe:
    """Get DashboardServiceProbe instance bound to the request context.

    Returns:
        DefaultDashboardServiceProbe instance for observability
    """
    return DefaultDashboardServiceProbe().with_context(context)


def get_dashboard_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> DashboardRepository:
    """Get DashboardRepository instance.

    Args:
        session: Async database session
        context: Observation context for the current request

    Returns:
        DashboardRepository instance
    """
    return DashboardRepository(
        session=session,
        probe=DefaultDashboardRepositoryProbe().with_context(context),
    )


def get_dashboard_service(
    dashboard_repo: Annotated[DashboardRepository, Depends(get_dashboard_repository)],
    agent_repo: Annotated[AgentRepository, Depends(get_agent_repository)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    tenant_resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[DashboardServiceProbe, Depends(get_dashboard_service_probe)],
) -> DashboardService:
    """Get DashboardService instance.

    Args:
        dashboard_repo: Dashboard repository (shares session via FastAPI dependency caching)
        agent_repo: Agent repository used to validate membership changes
        tenant_repo: Tenant repository used to look up tenant names
        tenant_resolver: Resolver for the tenant chosen on the dashboard form
        session: Database session for transaction management
        probe: Dashboard service probe for observability

    Returns:
        DashboardService instance
    """
    return DashboardService(
        dashboard_repository=dashboard_repo,
        agent_repository=agent_repo,
        tenant_repository=tenant_repo,
        tenant_resolver=tenant_resolver,
        session=session,
        probe=probe,
    )
