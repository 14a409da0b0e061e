"""
Diagram ORM model.

Represents a flow-chart diagram (nodes, edges, image references) owned by
exactly one user.

Dependencies: sqlalchemy, bossflow.boundary.db.base
System role: Diagram persistence
"""

from uuid import UUID

from sqlalchemy import JSON, Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bossflow.boundary.db.base import Base, UUIDMixin, TimestampMixin


class DiagramModel(Base, UUIDMixin, TimestampMixin):
    """
    Diagram ORM model.

    Nodes, edges and images are stored as JSON documents exactly as the
    editor sends them. The (owner_id, title) unique constraint admits at most
    one committed row per owner and title, even under concurrent inserts.

    Attributes:
        id: UUID primary key (auto-generated)
        owner_id: Owning user; set on creation, never changed
        title: Trimmed title, 3-100 characters, unique per owner
        description: Optional description (up to 500 chars)
        nodes: List of node objects
        edges: List of edge objects
        images: Top-level image references (at most 10)
        is_template: Whether the diagram is a reusable template
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        owner: Many-to-one with UserModel (cascade delete on user removal)
    """

    __tablename__ = "diagrams"
    __table_args__ = (
        UniqueConstraint("owner_id", "title", name="uq_diagrams_owner_title"),
        Index("ix_diagrams_owner_updated_at", "owner_id", "updated_at"),
    )

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Owning user ID",
    )

    title: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        doc="Diagram title",
    )

    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default="",
        doc="Diagram description",
    )

    nodes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    edges: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    is_template: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Reusable template flag",
    )

    # Relationships
    owner = relationship("UserModel", back_populates="diagrams")
