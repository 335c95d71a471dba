"""
Database connection management.

Provides async SQLAlchemy engine and session factory built from settings,
plus table creation for local databases.

Dependencies: sqlalchemy, speaker_companion.configs
System role: Database connection lifecycle management
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from speaker_companion.boundary.db.base import Base
from speaker_companion.configs import DatabaseSettings, get_settings

logger = logging.getLogger(__name__)


def get_async_engine(db_config: DatabaseSettings | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    PostgreSQL engines get a sized pool with pre-ping; SQLite engines use the
    dialect's default pool.

    Args:
        db_config: Database settings (application settings when omitted)

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = db_config or get_settings().database

    if db_config.is_sqlite:
        return create_async_engine(db_config.async_database_url, echo=db_config.echo_sql)

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to engine with autoflush=False and
    expire_on_commit=False for explicit transaction control.

    Args:
        engine: Engine to bind (new engine from settings when omitted)

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all registered tables that do not exist yet.

    Args:
        engine: Target engine
    """
    # Import registers the ORM models on Base.metadata
    from speaker_companion.boundary.db.models import AnalysisModel  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})
