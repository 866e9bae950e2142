"""Database-specific exceptions shared by all bounded contexts."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class DatabaseNotInitializedError(DatabaseError):
    """Raised when a session is requested before the engine exists."""

    pass
