"""Domain-Oriented Observability for catalog infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from catalog.infrastructure.observability.repository_probe import (
    AgentRepositoryProbe,
    DashboardRepositoryProbe,
    DefaultAgentRepositoryProbe,
    DefaultDashboardRepositoryProbe,
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)

__all__ = [
    "AgentRepositoryProbe",
    "DefaultAgentRepositoryProbe",
    "DashboardRepositoryProbe",
    "DefaultDashboardRepositoryProbe",
    "TenantRepositoryProbe",
    "DefaultTenantRepositoryProbe",
]
