"""Port exceptions for the catalog context.

Raised by repositories and application services. Routes translate them
into HTTP status codes.
"""


class ConflictError(Exception):
    """Raised when a write would break a uniqueness rule."""

    pass


class DuplicateTenantNameError(ConflictError):
    """Raised when attempting to use a tenant name that already exists.

    Tenant names are globally unique and compared exactly (case-sensitive).
    """

    pass


class DuplicateSlugError(ConflictError):
    """Raised when a generated agent or dashboard slug is already taken."""

    pass


class DuplicateMembershipError(ConflictError):
    """Raised when an agent is added to a dashboard it was concurrently joined to."""

    pass


class NotFoundError(Exception):
    """Raised when a referenced entity does not exist."""

    pass


class TenantNotFoundError(NotFoundError):
    """Raised when a tenant ID does not reference an existing tenant."""

    pass


class AgentNotFoundError(NotFoundError):
    """Raised when one or more agent IDs do not reference existing agents."""

    pass


class DashboardNotFoundError(NotFoundError):
    """Raised when a dashboard ID does not reference an existing dashboard."""

    pass


class TenantDeletionError(Exception):
    """Raised when the tenant deletion sequence fails part-way.

    The surrounding transaction is rolled back before this is raised, so
    none of the agent, dashboard or tenant changes are persisted. The
    underlying failure is available as ``cause``.
    """

    def __init__(self, tenant_id: str, cause: Exception):
        super().__init__(f"Failed to delete tenant {tenant_id}: {cause}")
        self.tenant_id = tenant_id
        self.cause = cause
