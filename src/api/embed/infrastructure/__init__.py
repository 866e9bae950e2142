"""Embed infrastructure: dashboard resolver implementations."""

from embed.infrastructure.dashboard_resolvers import (
    DatabaseDashboardResolver,
    StaticDashboardResolver,
)

__all__ = ["DatabaseDashboardResolver", "StaticDashboardResolver"]
