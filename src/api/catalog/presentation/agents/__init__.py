"""Agents presentation: HTTP routes and request/response models."""

from catalog.presentation.agents.routes import router

__all__ = ["router"]
