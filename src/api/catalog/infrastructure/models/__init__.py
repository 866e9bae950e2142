"""SQLAlchemy ORM models for the catalog bounded context.

These models map to database tables and are used by repository implementations.
"""

from catalog.infrastructure.models.agent import AgentModel
from catalog.infrastructure.models.dashboard import DashboardAgentModel, DashboardModel
from catalog.infrastructure.models.tenant import TenantModel

__all__ = [
    "AgentModel",
    "DashboardAgentModel",
    "DashboardModel",
    "TenantModel",
]
