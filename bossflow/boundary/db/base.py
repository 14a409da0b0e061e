"""
SQLAlchemy declarative base and common mixins.

Dependencies: sqlalchemy
System role: Foundation for the users and diagrams tables
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base; every model registered here is created by create_all_tables."""


class UUIDMixin:
    """
    UUID v4 primary key.

    Native UUID on PostgreSQL, CHAR(32) on SQLite.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )


class TimestampMixin:
    """
    Creation and modification timestamps (UTC).

    Services set both explicitly so a diagram's createdAt and updatedAt are
    identical on creation; the defaults cover rows inserted elsewhere.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
