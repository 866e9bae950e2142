"""Shared infrastructure dependencies.

Provides request-scoped resources that every bounded context uses.
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from fastapi import Request
from ulid import ULID

from shared_kernel.observability_context import ObservationContext

REQUEST_ID_HEADER = "X-Request-ID"


def get_observation_context(request: Request) -> ObservationContext:
    """Build the observation context for the current request.

    Reuses the caller's X-Request-ID when present so log events can be
    correlated with upstream proxies; otherwise a fresh ULID is used.

    Returns:
        ObservationContext with request ID and route name
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(ULID())
    route = request.scope.get("route")
    return ObservationContext(
        request_id=request_id,
        route=getattr(route, "name", None),
    )
