"""Embed domain module.

Contains the read-only views served to public embed pages and the rules
for decorating them.
"""

from embed.domain.icons import DEFAULT_ICON, agent_icon
from embed.domain.value_objects import (
    DashboardSource,
    EmbeddedAgent,
    EmbeddedAgentCard,
    EmbeddedDashboard,
)

__all__ = [
    "DEFAULT_ICON",
    "DashboardSource",
    "EmbeddedAgent",
    "EmbeddedAgentCard",
    "EmbeddedDashboard",
    "agent_icon",
]
