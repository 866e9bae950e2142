"""Application services for the catalog bounded context.

Application services orchestrate domain aggregates and repositories to
fulfill use cases. They own transaction boundaries and are the front door
to the catalog context.
"""

from catalog.application.services.agent_service import AgentService
from catalog.application.services.dashboard_service import DashboardService
from catalog.application.services.tenant_resolver import TenantResolver
from catalog.application.services.tenant_service import TenantService

__all__ = [
    "AgentService",
    "DashboardService",
    "TenantResolver",
    "TenantService",
]
