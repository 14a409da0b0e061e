"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, bossflow.configs
System role: Database schema initialization

Usage:
    python -m bossflow.boundary.db.create_tables
"""

import asyncio
import logging

from bossflow.boundary.db.base import Base
from bossflow.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from bossflow.boundary.db.models.user_model import UserModel  # noqa: F401
from bossflow.boundary.db.models.diagram_model import DiagramModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables() -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: calls CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created", extra={"tables": sorted(Base.metadata.tables)})


async def drop_all_tables() -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.

    Usage:
        # In development only:
        from bossflow.boundary.db.create_tables import drop_all_tables, create_all_tables
        await drop_all_tables()
        await create_all_tables()  # Reinitialize clean database
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All tables dropped")


if __name__ == "__main__":
    from bossflow.observability.logger import configure_logging

    configure_logging()
    asyncio.run(create_all_tables())
