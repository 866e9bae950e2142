"""Embed ports (interfaces) module.

Ports define the contracts between the embed application layer and the
sources it reads dashboards from.
"""

from embed.ports.exceptions import EmbedNotFoundError
from embed.ports.resolvers import IDashboardResolver

__all__ = ["EmbedNotFoundError", "IDashboardResolver"]
