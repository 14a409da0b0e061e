"""
Base CRUD operations for SQLAlchemy models.

Generic create and primary-key lookup shared by the model-specific CRUD
classes. Queries that need ownership checks live in the subclasses.

Dependencies: sqlalchemy
System role: Foundation for diagram and user persistence
"""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bossflow.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Insert a new row and load its server-side state.

        The row is flushed, not committed; the caller owns the transaction.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID

        Raises:
            IntegrityError: A unique or foreign key constraint rejected the row
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Retrieve a single row by primary key, or None."""
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
