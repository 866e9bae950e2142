"""Value objects for the catalog domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import re
import secrets
import string
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ulid import ULID

from catalog.domain.exceptions import InvalidSlugError


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantId:
        """Generate a new TenantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Args:
            value: ULID string

        Returns:
            TenantId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid TenantId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class AgentId:
    """Identifier for an Agent aggregate."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> AgentId:
        """Generate a new AgentId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> AgentId:
        """Create AgentId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid AgentId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class DashboardId:
    """Identifier for a Dashboard aggregate."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> DashboardId:
        """Generate a new DashboardId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> DashboardId:
        """Create DashboardId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid DashboardId: {value}") from e

        return cls(value=value)


SLUG_ALPHABET = string.ascii_lowercase + string.digits
GENERATED_SLUG_LENGTH = 12
MAX_SLUG_LENGTH = 50
RESERVED_SLUGS = frozenset({"api", "admin", "embed", "_next"})
_SLUG_PATTERN = re.compile(r"[a-z0-9-]+")


@dataclass(frozen=True)
class Slug:
    """URL-facing identifier of an agent or dashboard.

    Slugs are assigned once at creation and never change. System-generated
    slugs draw 12 characters from [a-z0-9] (about 62 bits), so collisions
    are left to the store's unique constraint.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> Slug:
        """Generate a random slug using a cryptographically secure source."""
        return cls(
            value="".join(
                secrets.choice(SLUG_ALPHABET) for _ in range(GENERATED_SLUG_LENGTH)
            )
        )

    @classmethod
    def from_string(cls, value: str) -> Slug:
        """Validate a slug candidate.

        Args:
            value: Candidate slug

        Returns:
            Slug instance

        Raises:
            InvalidSlugError: If the candidate is empty, longer than 50
                characters, contains characters outside [a-z0-9-], or is a
                reserved route name
        """
        if not value:
            raise InvalidSlugError("Slug must not be empty")
        if len(value) > MAX_SLUG_LENGTH:
            raise InvalidSlugError(
                f"Slug must be at most {MAX_SLUG_LENGTH} characters"
            )
        if value in RESERVED_SLUGS:
            raise InvalidSlugError(f"Slug '{value}' is reserved")
        if not _SLUG_PATTERN.fullmatch(value):
            raise InvalidSlugError(
                "Slug may only contain lowercase letters, digits and hyphens"
            )

        return cls(value=value)


@dataclass(frozen=True)
class ExistingTenant:
    """Tenant choice pointing at a tenant that already exists."""

    tenant_id: TenantId


@dataclass(frozen=True)
class NewTenantName:
    """Tenant choice asking for a tenant to be created with this name."""

    name: str


@dataclass(frozen=True)
class NoTenant:
    """Tenant choice for the General Purpose group (no tenant)."""


TenantChoice = ExistingTenant | NewTenantName | NoTenant


class TenantScope(StrEnum):
    """Which agents or dashboards a listing covers."""

    ALL = "all"
    GENERAL = "general"
    TENANT = "tenant"


@dataclass(frozen=True)
class TenantFilter:
    """Listing filter over the tenant an item belongs to.

    ``general`` selects items without a tenant; ``tenant`` selects the
    items of one specific tenant.
    """

    scope: TenantScope = TenantScope.ALL
    tenant_id: TenantId | None = None

    def __post_init__(self) -> None:
        if (self.scope == TenantScope.TENANT) != (self.tenant_id is not None):
            raise ValueError("A tenant_id is required exactly when scope is 'tenant'")

    @classmethod
    def all(cls) -> TenantFilter:
        return cls(scope=TenantScope.ALL)

    @classmethod
    def general(cls) -> TenantFilter:
        return cls(scope=TenantScope.GENERAL)

    @classmethod
    def for_tenant(cls, tenant_id: TenantId) -> TenantFilter:
        return cls(scope=TenantScope.TENANT, tenant_id=tenant_id)

    @classmethod
    def parse(cls, value: str | None) -> TenantFilter:
        """Parse the query-string form: missing/"all", "general", or a tenant ID.

        Raises:
            ValueError: If value is neither keyword nor a valid tenant ID
        """
        if value is None or value == TenantScope.ALL:
            return cls.all()
        if value == TenantScope.GENERAL:
            return cls.general()
        return cls.for_tenant(TenantId.from_string(value))


class TenantDisposition(StrEnum):
    """What happens to a tenant's agents when the tenant is deleted."""

    MAKE_GENERAL = "make_general"
    REASSIGN = "reassign"
    DELETE_AGENTS = "delete_agents"


@dataclass(frozen=True)
class DashboardMembership:
    """An agent's place on a dashboard.

    Memberships are displayed by ascending ``order``. Orders are unique per
    dashboard but need not be contiguous.
    """

    agent_id: AgentId
    order: int
    created_at: datetime

    def __post_init__(self) -> None:
        if self.order < 0:
            raise ValueError("Membership order must be non-negative")
