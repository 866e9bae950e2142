"""HTTP routes for dashboards and their agent membership."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalog.application.services import DashboardService
from catalog.dependencies.dashboard import get_dashboard_service
from catalog.domain.exceptions import ValidationError
from catalog.domain.value_objects import DashboardId, NoTenant, TenantFilter
from catalog.ports.exceptions import (
    AgentNotFoundError,
    ConflictError,
    DashboardNotFoundError,
    DuplicateTenantNameError,
    TenantNotFoundError,
)
from catalog.presentation.dashboards.models import (
    CreateDashboardRequest,
    DashboardDetailResponse,
    DashboardResponse,
    DashboardSummaryResponse,
    UpdateDashboardRequest,
)
from catalog.presentation.models import AgentIdsRequest

router = APIRouter(
    prefix="/dashboards",
    tags=["dashboards"],
)

_MEMBERSHIP_RESPONSES = {
    204: {"description": "Membership updated"},
    400: {"description": "Invalid dashboard or agent ID, or empty agent list"},
    404: {"description": "Dashboard or agent not found"},
    409: {"description": "Membership changed concurrently"},
    500: {"description": "Internal server error"},
}


def _parse_dashboard_id(dashboard_id: str) -> DashboardId:
    try:
        return DashboardId.from_string(dashboard_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid dashboard ID format: {e}",
        ) from e


@router.get("")
async def list_dashboards(
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
    tenant_id: Annotated[
        str | None,
        Query(description="'all' (default), 'general', or a tenant ID"),
    ] = None,
) -> list[DashboardSummaryResponse]:
    """List dashboards, newest first, with tenant names and agent counts.

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
        summaries = await service.list_dashboards(tenant_filter)
        return [DashboardSummaryResponse.from_summary(s) for s in summaries]

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list dashboards",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_dashboard(
    request: CreateDashboardRequest,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardResponse:
    """Create a dashboard, optionally with an initial ordered set of agents.

    Raises:
        HTTPException: 400 if input is invalid
        HTTPException: 404 if the chosen tenant or an agent does not exist
        HTTPException: 409 if the new tenant name or slug is taken
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant = request.tenant_choice() or NoTenant()
        agent_ids = request.to_domain_agent_ids()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    try:
        dashboard = await service.create_dashboard(
            title=request.title,
            tenant=tenant,
            agent_ids=agent_ids,
        )
        return DashboardResponse.from_domain(dashboard)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except (TenantNotFoundError, AgentNotFoundError) as e:
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
            detail="Failed to create dashboard",
        )


@router.get("/{dashboard_id}")
async def get_dashboard(
    dashboard_id: str,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardDetailResponse:
    """Get a dashboard with its agents in display order.

    Raises:
        HTTPException: 400 if dashboard ID is invalid
        HTTPException: 404 if dashboard not found
        HTTPException: 500 for unexpected errors
    """
    dashboard_id_obj = _parse_dashboard_id(dashboard_id)

    try:
        details = await service.get_dashboard_with_agents(dashboard_id_obj)
        return DashboardDetailResponse.from_details(details)

    except DashboardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Dashboard {dashboard_id} not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve dashboard",
        )


@router.patch("/{dashboard_id}")
async def update_dashboard(
    dashboard_id: str,
    request: UpdateDashboardRequest,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardResponse:
    """Partially update a dashboard. The slug never changes.

    Raises:
        HTTPException: 400 if input is invalid or no field is given
        HTTPException: 404 if the dashboard, tenant or an agent does not exist
        HTTPException: 409 if the new tenant name is taken or membership conflicts
        HTTPException: 500 for unexpected errors
    """
    dashboard_id_obj = _parse_dashboard_id(dashboard_id)
    try:
        tenant = request.tenant_choice()
        agent_ids = request.to_domain_agent_ids()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    try:
        dashboard = await service.update_dashboard(
            dashboard_id_obj,
            title=request.title,
            tenant=tenant,
            agent_ids=agent_ids,
        )
        return DashboardResponse.from_domain(dashboard)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except DashboardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Dashboard {dashboard_id} not found",
        )
    except (TenantNotFoundError, AgentNotFoundError) as e:
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
            detail="Failed to update dashboard",
        )


@router.delete(
    "/{dashboard_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "Dashboard deleted successfully"},
        400: {"description": "Invalid dashboard ID format"},
        404: {"description": "Dashboard not found"},
        500: {"description": "Internal server error"},
    },
)
async def delete_dashboard(
    dashboard_id: str,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> None:
    """Delete a dashboard. Its agents are not affected.

    Raises:
        HTTPException: 400 if dashboard ID is invalid
        HTTPException: 404 if dashboard not found
        HTTPException: 500 for unexpected errors
    """
    dashboard_id_obj = _parse_dashboard_id(dashboard_id)

    try:
        await service.delete_dashboard(dashboard_id_obj)

    except DashboardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Dashboard {dashboard_id} not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete dashboard",
        )


@router.post(
    "/{dashboard_id}/agents",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses=_MEMBERSHIP_RESPONSES,
)
async def add_dashboard_agents(
    dashboard_id: str,
    request: AgentIdsRequest,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> None:
    """Append agents to a dashboard. Agents already on it are skipped.

    Raises:
        HTTPException: 400 if an ID is invalid or the list is empty
        HTTPException: 404 if the dashboard or an agent does not exist
        HTTPException: 409 if membership changed concurrently
        HTTPException: 500 for unexpected errors
    """
    dashboard_id_obj = _parse_dashboard_id(dashboard_id)
    try:
        agent_ids = request.to_domain_ids()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid agent ID format: {e}",
        ) from e

    try:
        await service.add_agents(dashboard_id_obj, agent_ids)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except DashboardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Dashboard {dashboard_id} not found",
        )
    except AgentNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add agents to dashboard",
        )


@router.delete(
    "/{dashboard_id}/agents",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses=_MEMBERSHIP_RESPONSES,
)
async def remove_dashboard_agents(
    dashboard_id: str,
    request: AgentIdsRequest,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> None:
    """Remove agents from a dashboard. Agents not on it are ignored.

    Raises:
        HTTPException: 400 if an ID is invalid or the list is empty
        HTTPException: 404 if the dashboard does not exist
        HTTPException: 500 for unexpected errors
    """
    dashboard_id_obj = _parse_dashboard_id(dashboard_id)
    try:
        agent_ids = request.to_domain_ids()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid agent ID format: {e}",
        ) from e

    try:
        await service.remove_agents(dashboard_id_obj, agent_ids)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except DashboardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Dashboard {dashboard_id} not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove agents from dashboard",
        )


@router.put("/{dashboard_id}/agents")
async def set_dashboard_agents(
    dashboard_id: str,
    request: AgentIdsRequest,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardResponse:
    """Replace a dashboard's agents with the given set.

    Agents that stay keep their position; new ones are appended in the order
    given. An empty list clears the dashboard.

    Raises:
        HTTPException: 400 if an ID is invalid
        HTTPException: 404 if the dashboard or an agent does not exist
        HTTPException: 409 if membership changed concurrently
        HTTPException: 500 for unexpected errors
    """
    dashboard_id_obj = _parse_dashboard_id(dashboard_id)
    try:
        agent_ids = request.to_domain_ids()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid agent ID format: {e}",
        ) from e

    try:
        dashboard = await service.set_membership(dashboard_id_obj, agent_ids)
        return DashboardResponse.from_domain(dashboard)

    except DashboardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Dashboard {dashboard_id} not found",
        )
    except AgentNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update dashboard agents",
        )


@router.put("/{dashboard_id}/agents/order")
async def reorder_dashboard_agents(
    dashboard_id: str,
    request: AgentIdsRequest,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardResponse:
    """Set the display order of a dashboard's agents.

    The list must contain exactly the dashboard's current agents.

    Raises:
        HTTPException: 400 if an ID is invalid or the list is not the member set
        HTTPException: 404 if the dashboard does not exist
        HTTPException: 500 for unexpected errors
    """
    dashboard_id_obj = _parse_dashboard_id(dashboard_id)
    try:
        agent_ids = request.to_domain_ids()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid agent ID format: {e}",
        ) from e

    try:
        dashboard = await service.reorder_agents(dashboard_id_obj, agent_ids)
        return DashboardResponse.from_domain(dashboard)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except DashboardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Dashboard {dashboard_id} not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reorder dashboard agents",
        )
