"""Domain aggregates for the catalog context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from catalog.domain.aggregates.agent import Agent
from catalog.domain.aggregates.dashboard import Dashboard
from catalog.domain.aggregates.tenant import Tenant, normalize_tenant_name

__all__ = [
    "Agent",
    "Dashboard",
    "Tenant",
    "normalize_tenant_name",
]
