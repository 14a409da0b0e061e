"""
User CRUD operations.

Provides account creation with password hashing, uniqueness lookups and
the statistics counters updated by diagram operations.

Dependencies: sqlalchemy, bossflow.boundary.db.models, bossflow.core.security,
bossflow.models.user
System role: User persistence operations
"""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bossflow.boundary.db.models.user_model import UserModel
from bossflow.boundary.db.CRUD.base_crud import BaseCRUD
from bossflow.core.security import hash_password
from bossflow.models.user import UserCreate


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def create_user(
        self,
        session: AsyncSession,
        data: UserCreate,
    ) -> UserModel:
        """
        Create a user from validated account data.

        Args:
            session: Async database session
            data: Username and email already trimmed and checked; only the
                password hash is stored

        Returns:
            Created UserModel

        Raises:
            IntegrityError: Username or email already registered
        """
        return await self.create(
            session,
            username=data.username,
            email=str(data.email),
            password_hash=hash_password(data.password),
        )

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """Retrieve a user by email, case-insensitively."""
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def username_taken(self, session: AsyncSession, username: str) -> bool:
        stmt = select(UserModel.id).where(UserModel.username == username.strip())
        result = await session.execute(stmt)
        return result.first() is not None

    async def adjust_stats(
        self,
        session: AsyncSession,
        user_id: UUID,
        diagrams: int = 0,
        nodes: int = 0,
    ) -> None:
        """
        Increment the user's diagram and node counters.

        Args:
            session: Async database session
            user_id: User UUID
            diagrams: Delta for diagrams_created
            nodes: Delta for nodes_created (may be negative)
        """
        if not diagrams and not nodes:
            return
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                diagrams_created=UserModel.diagrams_created + diagrams,
                nodes_created=UserModel.nodes_created + nodes,
            )
        )
        await session.execute(stmt)


user_crud = UserCRUD()
