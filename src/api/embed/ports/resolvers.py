"""Resolver protocols (ports) for the embed context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from embed.domain import EmbeddedDashboard


@runtime_checkable
class IDashboardResolver(Protocol):
    """A source of embeddable dashboards.

    The embed service asks its resolvers in order and serves the first
    dashboard found, so a resolver must return None rather than raise when
    it does not know a slug.
    """

    async def resolve(self, slug: str) -> EmbeddedDashboard | None:
        """Look up a dashboard by its public slug.

        Args:
            slug: Dashboard slug from the embed URL

        Returns:
            The dashboard with its agent cards, or None if unknown here
        """
        ...
