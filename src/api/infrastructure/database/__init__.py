"""Database infrastructure - shared connection primitives."""

from infrastructure.database.exceptions import (
    DatabaseError,
    DatabaseNotInitializedError,
)

__all__ = [
    "DatabaseError",
    "DatabaseNotInitializedError",
]
