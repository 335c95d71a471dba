"""
Database configuration settings.

Manages PostgreSQL connection parameters for SQLAlchemy.
A full URL override allows SQLite for local development.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the analysis store
"""

from pydantic import Field

from speaker_companion.configs.base import BaseSettings, settings_config


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = settings_config("POSTGRES_")

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="speaker_companion", description="PostgreSQL database name")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    url_override: str | None = Field(
        default=None,
        description="Complete async SQLAlchemy URL (e.g. sqlite+aiosqlite:///./analyses.db)",
    )

    @property
    def async_database_url(self) -> str:
        """
        Construct async database connection URL.

        Returns:
            str: SQLAlchemy async-compatible database URL
        """
        if self.url_override:
            return self.url_override
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}"
        )

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL targets SQLite (no connection pool sizing)."""
        return self.async_database_url.startswith("sqlite")
