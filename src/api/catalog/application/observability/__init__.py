"""Domain-Oriented Observability for the catalog application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from catalog.application.observability.agent_service_probe import (
    AgentServiceProbe,
    DefaultAgentServiceProbe,
)
from catalog.application.observability.dashboard_service_probe import (
    DashboardServiceProbe,
    DefaultDashboardServiceProbe,
)
from catalog.application.observability.tenant_service_probe import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)

__all__ = [
    "AgentServiceProbe",
    "DefaultAgentServiceProbe",
    "DashboardServiceProbe",
    "DefaultDashboardServiceProbe",
    "TenantServiceProbe",
    "DefaultTenantServiceProbe",
]
