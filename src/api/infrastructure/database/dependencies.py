"""Database dependency injection for FastAPI.

The engine is created once per process by the application lifespan and kept
on ``app.state``. Request handlers receive sessions through the dependencies
below instead of looking up a module-level engine.
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine, create_sessionmaker
from infrastructure.database.exceptions import DatabaseNotInitializedError
from infrastructure.observability import ConnectionProbe, DefaultConnectionProbe
from infrastructure.settings import DatabaseSettings


class Database:
    """Owns the engine and session factory for the lifetime of the app.

    One instance is built at startup and passed to everything that needs
    a session. Tests construct it around their own engine.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        probe: ConnectionProbe | None = None,
    ) -> None:
        self._engine = engine
        self._sessionmaker = create_sessionmaker(engine)
        self._probe = probe or DefaultConnectionProbe()

    @classmethod
    def from_settings(
        cls,
        settings: DatabaseSettings,
        probe: ConnectionProbe | None = None,
    ) -> Database:
        """Create the engine described by settings and wrap it.

        Args:
            settings: Database connection settings
            probe: Optional domain probe for observability

        Returns:
            Database owning a freshly created engine
        """
        database = cls(create_engine(settings), probe=probe)
        database._probe.engine_created(
            url=settings.connection_string,
            pool_size=settings.pool_size,
            max_overflow=settings.pool_max_connections - settings.pool_size,
        )
        return database

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        return self._sessionmaker

    async def ping(self) -> bool:
        """Run a trivial query to verify the database is reachable.

        Returns:
            True if the query succeeded, False otherwise
        """
        try:
            async with self._engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
        except Exception as e:
            self._probe.health_check_failed(e)
            return False
        return True

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self._engine.dispose()
        self._probe.engine_disposed()


def get_database(request: Request) -> Database:
    """Return the Database created by the application lifespan.

    Raises:
        DatabaseNotInitializedError: If the lifespan has not run
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseNotInitializedError(
            "Database not initialized. Ensure app startup completed successfully."
        )
    return database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the current request (FastAPI dependency).

    The session is configured to NOT auto-commit. Callers must explicitly
    manage transactions using `async with session.begin()`.

    Yields:
        AsyncSession for database operations
    """
    database = get_database(request)
    async with database.sessionmaker() as session:
        yield session
