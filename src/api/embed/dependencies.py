"""FastAPI dependencies for the embed context."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.dependencies.agent import get_agent_repository
from catalog.dependencies.dashboard import get_dashboard_repository
from catalog.infrastructure.agent_repository import AgentRepository
from catalog.infrastructure.dashboard_repository import DashboardRepository
from embed.application import EmbedService
from embed.application.observability import (
    DefaultEmbedServiceProbe,
    EmbedServiceProbe,
)
from embed.infrastructure import DatabaseDashboardResolver, StaticDashboardResolver
from embed.ports import IDashboardResolver
from infrastructure.database.dependencies import get_session
from infrastructure.dependencies import get_observation_context
from infrastructure.settings import EmbedSettings, get_embed_settings
from shared_kernel.observability_context import ObservationContext


def get_embed_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> EmbedServiceProbe:
    """Get EmbedServiceProbe instance bound to the request context."""
    return DefaultEmbedServiceProbe().with_context(context)


def get_dashboard_resolvers(
    dashboard_repo: Annotated[DashboardRepository, Depends(get_dashboard_repository)],
    agent_repo: Annotated[AgentRepository, Depends(get_agent_repository)],
    settings: Annotated[EmbedSettings, Depends(get_embed_settings)],
) -> list[IDashboardResolver]:
    """Get the dashboard resolver chain, database first.

    Returns:
        Resolvers in the order they are consulted
    """
    return [
        DatabaseDashboardResolver(dashboard_repository=dashboard_repo),
        StaticDashboardResolver(
            agent_repository=agent_repo,
            clients=settings.legacy_clients,
            title=settings.legacy_title,
        ),
    ]


def get_embed_service(
    agent_repo: Annotated[AgentRepository, Depends(get_agent_repository)],
    resolvers: Annotated[list[IDashboardResolver], Depends(get_dashboard_resolvers)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[EmbedServiceProbe, Depends(get_embed_service_probe)],
) -> EmbedService:
    """Get EmbedService instance.

    Args:
        agent_repo: Agent repository (shares session via FastAPI dependency caching)
        resolvers: Ordered dashboard resolvers
        session: Database session for transaction management
        probe: Embed service probe for observability

    Returns:
        EmbedService instance
    """
    return EmbedService(
        agent_repository=agent_repo,
        resolvers=resolvers,
        session=session,
        probe=probe,
    )
