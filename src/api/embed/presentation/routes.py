"""Public HTTP routes serving embed pages' data."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from embed.application import EmbedService
from embed.dependencies import get_embed_service
from embed.ports import EmbedNotFoundError
from embed.presentation.models import (
    EmbeddedAgentCardResponse,
    EmbeddedAgentResponse,
    EmbeddedDashboardResponse,
)

router = APIRouter(
    prefix="/embed",
    tags=["embed"],
)


@router.get("/dashboard/{dashboard_slug}")
async def get_embedded_dashboard(
    dashboard_slug: str,
    service: Annotated[EmbedService, Depends(get_embed_service)],
) -> EmbeddedDashboardResponse:
    """Get a dashboard page by slug.

    Stored dashboards are served first; configured client pages are the
    fallback.

    Raises:
        HTTPException: 404 if no dashboard has the slug
        HTTPException: 500 for unexpected errors
    """
    try:
        dashboard = await service.resolve_dashboard(dashboard_slug)
        return EmbeddedDashboardResponse.from_domain(dashboard)

    except EmbedNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Dashboard {dashboard_slug} not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load dashboard",
        )


@router.get("/dashboard/{dashboard_slug}/{agent_slug}")
async def get_embedded_dashboard_agent(
    dashboard_slug: str,
    agent_slug: str,
    service: Annotated[EmbedService, Depends(get_embed_service)],
) -> EmbeddedAgentCardResponse:
    """Get an agent opened from a dashboard page.

    Raises:
        HTTPException: 404 if the dashboard is unknown or the agent is not on it
        HTTPException: 500 for unexpected errors
    """
    try:
        card = await service.resolve_dashboard_agent(dashboard_slug, agent_slug)
        return EmbeddedAgentCardResponse.from_domain(card)

    except EmbedNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load agent",
        )


@router.get("/{agent_slug}")
async def get_embedded_agent(
    agent_slug: str,
    service: Annotated[EmbedService, Depends(get_embed_service)],
) -> EmbeddedAgentResponse:
    """Get a standalone agent page by slug.

    Raises:
        HTTPException: 404 if no agent has the slug
        HTTPException: 500 for unexpected errors
    """
    try:
        agent = await service.resolve_agent(agent_slug)
        return EmbeddedAgentResponse.from_domain(agent)

    except EmbedNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent {agent_slug} not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load agent",
        )
