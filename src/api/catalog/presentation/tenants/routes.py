"""HTTP routes for tenant management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalog.application.services import TenantService
from catalog.dependencies.tenant import get_tenant_service
from catalog.domain.exceptions import ValidationError
from catalog.domain.value_objects import TenantDisposition, TenantId
from catalog.ports.exceptions import (
    DuplicateTenantNameError,
    TenantDeletionError,
    TenantNotFoundError,
)
from catalog.presentation.tenants.models import (
    CreateTenantRequest,
    TenantDeletionResponse,
    TenantResponse,
    TenantSummaryResponse,
    UpdateTenantRequest,
)

router = APIRouter(
    prefix="/tenants",
    tags=["tenants"],
)


@router.get("")
async def list_tenants(
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> list[TenantSummaryResponse]:
    """List all tenants, newest first, with their agent counts.

    Raises:
        HTTPException: 500 for unexpected errors
    """
    try:
        summaries = await service.list_tenants()
        return [TenantSummaryResponse.from_summary(s) for s in summaries]

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list tenants",
        )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
)
async def create_tenant(
    request: CreateTenantRequest,
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    """Create a new tenant.

    Args:
        request: Tenant creation request (name)
        service: Tenant service for orchestration

    Returns:
        TenantResponse with created tenant details

    Raises:
        HTTPException: 400 if the name breaks the naming rules
        HTTPException: 409 if tenant name already exists
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant = await service.create_tenant(name=request.name)
        return TenantResponse.from_domain(tenant)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
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
            detail="Failed to create tenant",
        )


@router.get("/{tenant_id}")
async def get_tenant(
    tenant_id: str,
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    """Get tenant by ID.

    Raises:
        HTTPException: 400 if tenant ID is invalid
        HTTPException: 404 if tenant not found
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant_id_obj = TenantId.from_string(tenant_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid tenant ID format: {e}",
        ) from e

    try:
        tenant = await service.get_tenant(tenant_id_obj)
        return TenantResponse.from_domain(tenant)

    except TenantNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tenant {tenant_id} not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve tenant",
        )


@router.patch("/{tenant_id}")
async def update_tenant(
    tenant_id: str,
    request: UpdateTenantRequest,
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    """Rename a tenant.

    Raises:
        HTTPException: 400 if tenant ID is invalid or the name breaks the rules
        HTTPException: 404 if tenant not found
        HTTPException: 409 if another tenant already has the name
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant_id_obj = TenantId.from_string(tenant_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid tenant ID format: {e}",
        ) from e

    try:
        tenant = await service.rename_tenant(tenant_id_obj, name=request.name)
        return TenantResponse.from_domain(tenant)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except TenantNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tenant {tenant_id} not found",
        )
    except DuplicateTenantNameError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A tenant with this name already exists",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update tenant",
        )


@router.delete(
    "/{tenant_id}",
    responses={
        200: {"description": "Tenant deleted; counts of affected rows returned"},
        400: {"description": "Invalid tenant ID or disposition"},
        404: {"description": "Tenant or target tenant not found"},
        500: {"description": "Deletion failed; nothing was changed"},
    },
)
async def delete_tenant(
    tenant_id: str,
    action: Annotated[
        TenantDisposition,
        Query(description="What to do with the tenant's agents"),
    ],
    service: Annotated[TenantService, Depends(get_tenant_service)],
    target_tenant_id: Annotated[
        str | None,
        Query(description="Receiving tenant ID, required when action=reassign"),
    ] = None,
) -> TenantDeletionResponse:
    """Delete a tenant.

    The tenant's agents are made General Purpose, reassigned to another
    tenant, or deleted, according to ``action``. Its dashboards always
    become General Purpose.

    Args:
        tenant_id: Tenant ID (ULID format)
        action: make_general, reassign or delete_agents
        service: Tenant service
        target_tenant_id: Tenant receiving the agents for reassign

    Returns:
        TenantDeletionResponse with affected counts

    Raises:
        HTTPException: 400 if an ID is invalid or the disposition is incomplete
        HTTPException: 404 if the tenant or target tenant is not found
        HTTPException: 500 if the deletion failed and was rolled back
    """
    try:
        tenant_id_obj = TenantId.from_string(tenant_id)
        target_id_obj = (
            TenantId.from_string(target_tenant_id)
            if target_tenant_id is not None
            else None
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid tenant ID format: {e}",
        ) from e

    try:
        result = await service.delete_tenant(
            tenant_id_obj,
            disposition=action,
            target_tenant_id=target_id_obj,
        )
        return TenantDeletionResponse.from_result(result)

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
    except TenantDeletionError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete tenant; no changes were made",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete tenant",
        )
