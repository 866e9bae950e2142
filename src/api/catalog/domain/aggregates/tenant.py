"""Tenant aggregate for the catalog context."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime

from catalog.domain.exceptions import InvalidTenantNameError
from catalog.domain.value_objects import TenantId

MAX_TENANT_NAME_LENGTH = 255
_TENANT_NAME_PATTERN = re.compile(r"[A-Za-z0-9 _.\-]+")


def normalize_tenant_name(name: str) -> str:
    """Trim a tenant name and check it against the naming rules.

    Args:
        name: Raw name as entered by the user

    Returns:
        The trimmed name

    Raises:
        InvalidTenantNameError: If the trimmed name is empty, longer than
            255 characters, or contains characters other than letters,
            digits, spaces, underscores, periods and hyphens
    """
    trimmed = name.strip()
    if not trimmed:
        raise InvalidTenantNameError("Tenant name is required")
    if len(trimmed) > MAX_TENANT_NAME_LENGTH:
        raise InvalidTenantNameError(
            f"Tenant name must be at most {MAX_TENANT_NAME_LENGTH} characters"
        )
    if not _TENANT_NAME_PATTERN.fullmatch(trimmed):
        raise InvalidTenantNameError(
            "Tenant name can only contain letters, numbers, spaces, "
            "hyphens, underscores, and periods"
        )
    return trimmed


@dataclass
class Tenant:
    """Tenant aggregate grouping agents and dashboards under one owner.

    Business rules:
    - Names are trimmed and must be 1-255 characters of [A-Za-z0-9 _.-]
    - Names are globally unique (enforced by the store)
    - Agents and dashboards without a tenant belong to the implicit
      General Purpose group, which is not a Tenant
    """

    id: TenantId
    name: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        self.name = normalize_tenant_name(self.name)

    @classmethod
    def create(cls, name: str) -> Tenant:
        """Factory method for creating a new tenant.

        Args:
            name: The tenant name (trimmed before validation)

        Returns:
            A new Tenant aggregate

        Raises:
            InvalidTenantNameError: If the name breaks the naming rules
        """
        now = datetime.now(UTC)
        return cls(
            id=TenantId.generate(),
            name=name,
            created_at=now,
            updated_at=now,
        )

    def rename(self, name: str) -> None:
        """Change the tenant's name.

        Raises:
            InvalidTenantNameError: If the name breaks the naming rules
        """
        self.name = normalize_tenant_name(name)
        self.updated_at = datetime.now(UTC)
