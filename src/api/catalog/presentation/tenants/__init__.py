"""Tenants presentation: HTTP routes and request/response models."""

from catalog.presentation.tenants.routes import router

__all__ = ["router"]
