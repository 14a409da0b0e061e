"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI dependency
for database session injection.

Dependencies: sqlalchemy, bossflow.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bossflow.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create the process-wide async engine.

    PostgreSQL gets a sized pool with pre-ping; SQLite URLs get the
    dialect default pool, which rejects sizing arguments.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    settings = get_settings()
    db_config = settings.database

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


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to the engine with autoflush=False and
    expire_on_commit=False for explicit transaction control.

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session dependency.

    The session is closed when the request finishes; an open transaction is
    rolled back on close. DiagramService owns commit and rollback.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session

