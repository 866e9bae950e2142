"""Embed application layer."""

from embed.application.embed_service import EmbedService

__all__ = ["EmbedService"]
