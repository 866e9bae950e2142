"""HTTP routes for agent management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalog.application.services import AgentService
from catalog.dependencies.agent import get_agent_service
from catalog.domain.exceptions import ValidationError
from catalog.domain.value_objects import AgentId, NoTenant, TenantFilter
from catalog.ports.exceptions import (
    AgentNotFoundError,
    ConflictError,
    DuplicateTenantNameError,
    TenantNotFoundError,
)
from catalog.presentation.agents.models import (
    AgentResponse,
    CreateAgentRequest,
    UpdateAgentRequest,
)

router = APIRouter(
    prefix="/agents",
    tags=["agents"],
)


@router.get("")
async def list_agents(
    service: Annotated[AgentService, Depends(get_agent_service)],
    tenant_id: Annotated[
        str | None,
        Query(description="'all' (default), 'general', or a tenant ID"),
    ] = None,
) -> list[AgentResponse]:
    """List agents, newest first, optionally filtered by tenant.

    Raises:
        HTTPException: 400 if the tenant filter is invalid
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant_filter = TenantFilter.parse(tenant_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid tenant filter: {e}",
        ) from e

    try:
        agents = await service.list_agents(tenant_filter)
        return [AgentResponse.from_domain(agent) for agent in agents]

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list agents",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_agent(
    request: CreateAgentRequest,
    service: Annotated[AgentService, Depends(get_agent_service)],
) -> AgentResponse:
    """Create an agent.

    The tenant may be an existing tenant, a new tenant created from
    ``new_tenant_name``, or none.

    Args:
        request: Agent creation request
        service: Agent service for orchestration

    Returns:
        AgentResponse with the created agent and its generated slug

    Raises:
        HTTPException: 400 if input is invalid
        HTTPException: 404 if the chosen tenant does not exist
        HTTPException: 409 if the new tenant name or slug is taken
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant = request.tenant_choice() or NoTenant()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    try:
        agent = await service.create_agent(
            name=request.name,
            workflow_id=request.workflow_id,
            tenant=tenant,
        )
        return AgentResponse.from_domain(agent)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except TenantNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except DuplicateTenantNameError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A tenant with this name already exists",
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create agent",
        )


@router.get("/{agent_id}")
async def get_agent(
    agent_id: str,
    service: Annotated[AgentService, Depends(get_agent_service)],
) -> AgentResponse:
    """Get agent by ID.

    Raises:
        HTTPException: 400 if agent ID is invalid
        HTTPException: 404 if agent not found
        HTTPException: 500 for unexpected errors
    """
    try:
        agent_id_obj = AgentId.from_string(agent_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid agent ID format: {e}",
        ) from e

    try:
        agent = await service.get_agent(agent_id_obj)
        return AgentResponse.from_domain(agent)

    except AgentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent {agent_id} not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve agent",
        )


@router.patch("/{agent_id}")
async def update_agent(
    agent_id: str,
    request: UpdateAgentRequest,
    service: Annotated[AgentService, Depends(get_agent_service)],
) -> AgentResponse:
    """Partially update an agent. The slug never changes.

    Raises:
        HTTPException: 400 if input is invalid or no field is given
        HTTPException: 404 if the agent or chosen tenant does not exist
        HTTPException: 409 if the new tenant name is taken
        HTTPException: 500 for unexpected errors
    """
    try:
        agent_id_obj = AgentId.from_string(agent_id)
        tenant = request.tenant_choice()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    try:
        agent = await service.update_agent(
            agent_id_obj,
            name=request.name,
            workflow_id=request.workflow_id,
            tenant=tenant,
        )
        return AgentResponse.from_domain(agent)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except AgentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent {agent_id} not found",
        )
    except TenantNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except DuplicateTenantNameError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A tenant with this name already exists",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update agent",
        )


@router.delete(
    "/{agent_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "Agent deleted successfully"},
        400: {"description": "Invalid agent ID format"},
        404: {"description": "Agent not found"},
        500: {"description": "Internal server error"},
    },
)
async def delete_agent(
    agent_id: str,
    service: Annotated[AgentService, Depends(get_agent_service)],
) -> None:
    """Delete an agent. It is removed from every dashboard it was on.

    Raises:
        HTTPException: 400 if agent ID is invalid
        HTTPException: 404 if agent not found
        HTTPException: 500 for unexpected errors
    """
    try:
        agent_id_obj = AgentId.from_string(agent_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid agent ID format: {e}",
        ) from e

    try:
        await service.delete_agent(agent_id_obj)

    except AgentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent {agent_id} not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete agent",
        )
