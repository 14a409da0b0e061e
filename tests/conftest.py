"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, persisted owners, diagram payload
builders, bearer token minting
Dependencies: pytest, sqlalchemy, aiosqlite, python-jose
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest
from jose import jwt

TEST_JWT_SECRET = "test-secret"
TEST_JWT_ALGORITHM = "HS256"


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    StaticPool keeps one connection alive so every session sees the same
    in-memory database.
    Foreign keys are switched on so ownership constraints behave as on
    PostgreSQL.
    """
    from sqlalchemy import event
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from bossflow.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Session factory configured like the application's."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create in-memory SQLite async database session for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


async def _persist_user(session_factory, username: str) -> uuid.UUID:
    from bossflow.boundary.db.CRUD.user_crud import user_crud
    from bossflow.models.user import UserCreate

    async with session_factory() as session:
        user = await user_crud.create_user(
            session,
            UserCreate(
                username=username,
                email=f"{username}@example.com",
                password="correct horse battery staple",
            ),
        )
        await session.commit()
        return user.id


@pytest.fixture
async def owner_id(test_session_factory) -> uuid.UUID:
    """ID of a persisted user owning the diagrams under test."""
    return await _persist_user(test_session_factory, "alice")


@pytest.fixture
async def other_owner_id(test_session_factory) -> uuid.UUID:
    """ID of a second persisted user."""
    return await _persist_user(test_session_factory, "mallory")


@pytest.fixture
def make_token() -> Callable[..., str]:
    """
    Mint bearer tokens signed with the test secret.

    Returns:
        Callable: make_token(user_id, expires_in=timedelta(hours=1), claim="userId")
    """
    def _make(
        user_id: uuid.UUID | str,
        expires_in: timedelta = timedelta(hours=1),
        claim: str = "userId",
        secret: str = TEST_JWT_SECRET,
    ) -> str:
        payload = {
            claim: str(user_id),
            "exp": datetime.now(timezone.utc) + expires_in,
        }
        return jwt.encode(payload, secret, algorithm=TEST_JWT_ALGORITHM)

    return _make


@pytest.fixture
def make_node() -> Callable[..., dict[str, Any]]:
    """Build a valid node payload."""
    def _make(node_id: str, x: float = 0, y: float = 0, **extra: Any) -> dict[str, Any]:
        node = {
            "id": node_id,
            "type": "default",
            "position": {"x": x, "y": y},
            "data": {"label": node_id},
        }
        node.update(extra)
        return node

    return _make


@pytest.fixture
def make_edge() -> Callable[..., dict[str, Any]]:
    """Build a valid edge payload."""
    def _make(source: str, target: str, edge_id: str | None = None, **extra: Any) -> dict[str, Any]:
        edge = {"id": edge_id or f"e-{source}-{target}", "source": source, "target": target}
        edge.update(extra)
        return edge

    return _make


@pytest.fixture
def make_image() -> Callable[..., dict[str, Any]]:
    """Build a valid image reference payload."""
    def _make(
        filename: str = "boss.png",
        mime_type: str = "image/png",
        size: int = 1024,
        **extra: Any,
    ) -> dict[str, Any]:
        image = {
            "filename": filename,
            "url": f"/uploads/{filename}",
            "mimeType": mime_type,
            "size": size,
        }
        image.update(extra)
        return image

    return _make
