"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from catalog import presentation as catalog_presentation
from embed import presentation as embed_presentation
from infrastructure.database.dependencies import Database, get_database
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.settings import get_embed_settings, get_settings
from infrastructure.version import __version__


def create_app(
    database: Database | None = None,
    probe: StartupProbe | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        database: Database to serve requests from. When omitted, one is
            created from settings at startup and disposed at shutdown.
        probe: Optional startup probe for observability

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()
    startup_probe = probe or DefaultStartupProbe()

    @asynccontextmanager
    async def switchboard_lifespan(app: FastAPI):
        """Application lifespan context.

        Manages:
        - Logging configuration
        - Database engine lifecycle (created at startup, disposed on shutdown)
        """
        configure_logging(debug=settings.debug)

        owned = database is None
        app.state.database = database or Database.from_settings(settings.database)
        startup_probe.legacy_clients_configured(
            client_slugs=sorted(get_embed_settings().legacy_clients)
        )
        startup_probe.application_started(
            app_name=settings.app_name, version=__version__
        )

        yield

        if owned:
            await app.state.database.dispose()
        startup_probe.application_stopped(app_name=settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="Admin API and public embed lookups for hosted chat agents",
        version=__version__,
        lifespan=switchboard_lifespan,
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Admin API under /api, public embed lookups under /embed
    app.include_router(catalog_presentation.router)
    app.include_router(embed_presentation.router)

    @app.get("/health")
    def health():
        """Basic health check endpoint."""
        return {"status": "ok"}

    @app.get("/health/db")
    async def health_db(request: Request) -> dict:
        """Check database connection health."""
        try:
            connected = await get_database(request).ping()
        except Exception as e:
            return {
                "status": "error",
                "connected": False,
                "error": str(e),
            }

        return {
            "status": "ok" if connected else "unhealthy",
            "connected": connected,
        }

    return app


app = create_app()
