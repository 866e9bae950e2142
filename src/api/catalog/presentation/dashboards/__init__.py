"""Dashboards presentation: HTTP routes and request/response models."""

from catalog.presentation.dashboards.routes import router

__all__ = ["router"]
