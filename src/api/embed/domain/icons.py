"""Icon selection for agent cards on embedded dashboards.

Icons are picked from keywords in the agent's name. Rules are checked in
order and the first match wins. Some client dashboards have their own rule
set, checked before the default rules.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ICON = "🤖"


@dataclass(frozen=True)
class IconRule:
    """Match when the name contains any of ``any_of`` and all of ``all_of``."""

    icon: str
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        if self.any_of and not any(word in name for word in self.any_of):
            return False
        return all(word in name for word in self.all_of)


_ALSHAYA_RULES: tuple[IconRule, ...] = (
    IconRule("💼", all_of=("tax", "accounting")),
    IconRule("📋", any_of=("conduct",)),
    IconRule("📄", any_of=("policy",)),
    IconRule("👥", any_of=("payroll", "hr")),
    IconRule("⚙️", any_of=("operations",)),
    IconRule("📊", any_of=("tax code",)),
    IconRule("👷", any_of=("labour",)),
)

_BELLWOOD_RULES: tuple[IconRule, ...] = (
    IconRule("📋", any_of=("policy", "guideline")),
    IconRule("📄", any_of=("contract",)),
    IconRule("🎯", any_of=("strategic", "plan")),
)

CLIENT_ICON_RULES: dict[str, tuple[IconRule, ...]] = {
    "alshaya": _ALSHAYA_RULES,
    "alshaya-xero": _ALSHAYA_RULES,
    "bellwood": _BELLWOOD_RULES,
}

DEFAULT_ICON_RULES: tuple[IconRule, ...] = (
    IconRule("💬", any_of=("support", "help")),
    IconRule("💼", any_of=("sales", "sell")),
    IconRule("🔧", any_of=("tech", "engineering")),
    IconRule("👥", any_of=("hr", "people")),
    IconRule("💼", all_of=("tax", "accounting")),
    IconRule("📋", any_of=("conduct",)),
    IconRule("📄", any_of=("policy",)),
    IconRule("👥", any_of=("payroll",)),
    IconRule("⚙️", any_of=("operations",)),
    IconRule("📊", any_of=("tax code",)),
    IconRule("👷", any_of=("labour",)),
    IconRule("📄", any_of=("contract",)),
    IconRule("🎯", any_of=("strategic", "plan")),
    IconRule("📋", any_of=("guideline",)),
)


def agent_icon(name: str, dashboard_slug: str) -> str:
    """Pick the icon for an agent card.

    Args:
        name: Agent display name (matched case-insensitively)
        dashboard_slug: Slug of the dashboard the card is shown on

    Returns:
        The icon of the first matching rule, or DEFAULT_ICON
    """
    lowered = name.lower()
    rules = CLIENT_ICON_RULES.get(dashboard_slug, ()) + DEFAULT_ICON_RULES
    for rule in rules:
        if rule.matches(lowered):
            return rule.icon
    return DEFAULT_ICON
