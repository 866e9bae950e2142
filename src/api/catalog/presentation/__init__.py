"""Catalog presentation layer - aggregate-based organization.

Organizes presentation concerns by domain aggregate (tenants, agents,
dashboards). Each aggregate package contains its own routes and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from catalog.presentation import agents, dashboards, tenants

# Admin API; public embed routes live in the embed context
router = APIRouter(prefix="/api")

router.include_router(tenants.router)
router.include_router(agents.router)
router.include_router(dashboards.router)

__all__ = ["router"]
