"""Embed presentation layer: public, read-only routes."""

from embed.presentation.routes import router

__all__ = ["router"]
