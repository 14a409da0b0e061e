"""
User ORM model.

Represents a BossFlow account that owns diagrams.

Dependencies: sqlalchemy, bossflow.boundary.db.base
System role: Diagram ownership and per-user statistics
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bossflow.boundary.db.base import Base, UUIDMixin, TimestampMixin


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Passwords are never stored in clear text; only the bcrypt hash is kept.
    Emails are stored lowercased so uniqueness is case-insensitive.

    Attributes:
        id: UUID primary key (auto-generated)
        username: Unique username (at least 3 characters)
        email: Unique, lowercased email address
        password_hash: bcrypt hash of the password
        diagrams_created: Number of diagrams the user has created
        nodes_created: Running node count across the user's diagrams
        diagrams: Diagrams owned by this user (cascade delete)
        created_at: Account creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        doc="Unique username",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        doc="Lowercased email address",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="bcrypt password hash",
    )

    diagrams_created: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    nodes_created: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Relationships
    diagrams = relationship(
        "DiagramModel",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
