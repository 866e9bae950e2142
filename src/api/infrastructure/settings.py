"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Client dashboards that predate database-backed dashboards. Each client slug
# maps to the workflow IDs of the agents shown on its dashboard.
DEFAULT_LEGACY_CLIENTS: dict[str, list[str]] = {
    "utb": [
        "wf_690a4234fa908190873eea1a64035039035ee8e865a3cd4b",
        "wf_690253c4ecac819089f591d7604d3f3e02bbca51471a4822",
    ],
    "bellwood": [
        "wf_690be00381d08190b31b24589592dd09046d49bb9156563c",
        "wf_690bdf2ead0881909f1d81fa8cc80c810f1ee4cdaa4a0413",
        "wf_690bde7970348190a9527dbd8357408e0b69a5ee352abc0a",
        "wf_690bddb16f18819087bbcb2af482bb480a23e612197bb03a",
        "wf_690bd4f8d24c8190b6a2dfd2b8b6058f0df37fc036b98a7c",
        "wf_690bd8e7b75c81908e017cb0a3a567bf0ed3ee2a4181f370",
    ],
    "alshaya": [
        "wf_690a4234fa908190873eea1a64035039035ee8e865a3cd4b",
    ],
    "alshaya-xero": [
        "wf_690253c4ecac819089f591d7604d3f3e02bbca51471a4822",
    ],
}


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        SWITCHBOARD_DB_HOST: Database host (default: localhost)
        SWITCHBOARD_DB_PORT: Database port (default: 5432)
        SWITCHBOARD_DB_DATABASE: Database name (default: switchboard)
        SWITCHBOARD_DB_USERNAME: Database user (default: switchboard)
        SWITCHBOARD_DB_PASSWORD: Database password (required in production)
        SWITCHBOARD_DB_POOL_SIZE: Persistent connections in pool (default: 5)
        SWITCHBOARD_DB_POOL_MAX_CONNECTIONS: Upper bound including overflow (default: 10)
        SWITCHBOARD_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="SWITCHBOARD_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="switchboard", description="Database name")
    username: str = Field(default="switchboard", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_size: int = Field(
        default=5,
        description="Persistent connections kept in the pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections including overflow",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= pool size."""
        if self.pool_max_connections < self.pool_size:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_size ({self.pool_size})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class EmbedSettings(BaseSettings):
    """Settings for the public embed surface.

    Environment variables:
        SWITCHBOARD_EMBED_LEGACY_CLIENTS: JSON object mapping client slug to a
            list of workflow IDs (default: the built-in client table)
        SWITCHBOARD_EMBED_LEGACY_TITLE: Title shown on legacy client dashboards
    """

    model_config = SettingsConfigDict(
        env_prefix="SWITCHBOARD_EMBED_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    legacy_clients: dict[str, list[str]] = Field(
        default_factory=lambda: {
            slug: list(ids) for slug, ids in DEFAULT_LEGACY_CLIENTS.items()
        },
        description="Client slug to workflow IDs for static dashboards",
    )
    legacy_title: str = Field(
        default="Agents",
        description="Title of static client dashboards",
        min_length=1,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="SWITCHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Switchboard API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    cors_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the admin API from a browser",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def embed(self) -> EmbedSettings:
        """Get embed settings."""
        return get_embed_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_embed_settings() -> EmbedSettings:
    """Get cached embed settings."""
    return EmbedSettings()
