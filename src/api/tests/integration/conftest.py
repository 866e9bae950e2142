"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance.
Use docker-compose for testing.
"""

from collections.abc import AsyncGenerator
import os

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

import catalog.infrastructure.models  # noqa: F401
from infrastructure.database.engines import create_engine, create_sessionmaker
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        SWITCHBOARD_DB_HOST, SWITCHBOARD_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("SWITCHBOARD_DB_HOST", "localhost"),
        port=int(os.getenv("SWITCHBOARD_DB_PORT", "5432")),
        database=os.getenv("SWITCHBOARD_DB_DATABASE", "switchboard"),
        username=os.getenv("SWITCHBOARD_DB_USERNAME", "switchboard"),
        password=SecretStr(
            os.getenv("SWITCHBOARD_DB_PASSWORD", "switchboard_dev_password")
        ),
    )


@pytest_asyncio.fixture
async def pg_engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine against a schema with empty catalog tables.

    Tables are created if migrations have not been applied. Rows are
    removed before and after each test, children first.
    """
    engine = create_engine(integration_db_settings)

    async def clean() -> None:
        async with engine.begin() as conn:
            for table in ("dashboard_agents", "dashboards", "agents", "tenants"):
                await conn.execute(text(f"DELETE FROM {table}"))

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await clean()

    yield engine

    await clean()
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(pg_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session for integration tests."""
    async with create_sessionmaker(pg_engine)() as session:
        yield session
