"""
Diagram CRUD operations.

Owner-scoped queries for DiagramModel. Every lookup filters on owner_id in
SQL so a foreign diagram is indistinguishable from a missing one.

Dependencies: sqlalchemy, bossflow.boundary.db.models
System role: Diagram persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from bossflow.boundary.db.models.diagram_model import DiagramModel
from bossflow.boundary.db.CRUD.base_crud import BaseCRUD


class DiagramCRUD(BaseCRUD[DiagramModel]):
    """
    CRUD operations for DiagramModel.

    Extends BaseCRUD with ownership-checked lookups, per-owner listing
    and title uniqueness queries.
    """

    def __init__(self) -> None:
        """Initialize DiagramCRUD with DiagramModel."""
        super().__init__(DiagramModel)

    async def get_owned(
        self,
        session: AsyncSession,
        owner_id: UUID,
        id: UUID,
        for_update: bool = False,
    ) -> DiagramModel | None:
        """
        Retrieve a diagram only if it belongs to owner_id.

        Args:
            session: Async database session
            owner_id: Requesting user's ID
            id: Diagram UUID
            for_update: Lock the row until the transaction ends

        Returns:
            DiagramModel if found and owned, None otherwise
        """
        stmt = select(DiagramModel).where(
            DiagramModel.id == id,
            DiagramModel.owner_id == owner_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_owner(
        self,
        session: AsyncSession,
        owner_id: UUID,
        is_template: bool = False,
    ) -> Sequence[DiagramModel]:
        """
        Retrieve an owner's diagrams, most recently modified first.

        Ties on updated_at fall back to creation order.

        Args:
            session: Async database session
            owner_id: Owning user's ID
            is_template: List templates instead of regular diagrams

        Returns:
            Sequence of DiagramModels
        """
        stmt = (
            select(DiagramModel)
            .where(
                DiagramModel.owner_id == owner_id,
                DiagramModel.is_template == is_template,
            )
            .order_by(DiagramModel.updated_at.desc(), DiagramModel.created_at.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def title_taken(
        self,
        session: AsyncSession,
        owner_id: UUID,
        title: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """
        Check whether owner_id already has a diagram titled exactly title.

        Args:
            session: Async database session
            owner_id: Owning user's ID
            title: Trimmed title (case-sensitive comparison)
            exclude_id: Diagram to ignore, used when renaming

        Returns:
            True if another diagram of the owner uses the title
        """
        stmt = select(DiagramModel.id).where(
            DiagramModel.owner_id == owner_id,
            DiagramModel.title == title,
        )
        if exclude_id is not None:
            stmt = stmt.where(DiagramModel.id != exclude_id)
        result = await session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def delete_owned(self, session: AsyncSession, owner_id: UUID, id: UUID) -> bool:
        """
        Delete a diagram if it belongs to owner_id.

        Returns:
            True if a row was deleted, False if missing or foreign
        """
        stmt = delete(DiagramModel).where(
            DiagramModel.id == id,
            DiagramModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


diagram_crud = DiagramCRUD()
