"""Domain-Oriented Observability for the embed application layer."""

from embed.application.observability.embed_service_probe import (
    DefaultEmbedServiceProbe,
    EmbedServiceProbe,
)

__all__ = ["EmbedServiceProbe", "DefaultEmbedServiceProbe"]
