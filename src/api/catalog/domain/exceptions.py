"""Domain exceptions for the catalog context.

Validation errors subclass ValueError so aggregate constructors keep the
usual "bad value" contract while callers can still catch the domain type.
"""


class ValidationError(ValueError):
    """Raised when input violates a catalog business rule."""

    pass


class InvalidTenantNameError(ValidationError):
    """Raised when a tenant name is empty, too long or has disallowed characters."""

    pass


class InvalidSlugError(ValidationError):
    """Raised when a slug candidate is malformed or reserved."""

    pass


class InvalidMembershipError(ValidationError):
    """Raised when a dashboard membership change is inconsistent.

    For example, a reorder request that does not list exactly the
    dashboard's current members.
    """

    pass
