"""
User service orchestrator.

Account registration for operators, and the profile and statistics read
paths for authenticated users.

Dependencies: bossflow.boundary.db.CRUD, bossflow.models.user, pydantic
System role: User use case orchestration
"""

import logging
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bossflow.boundary.db.CRUD.user_crud import user_crud
from bossflow.boundary.db.models.user_model import UserModel
from bossflow.core.exceptions import UnauthenticatedError, UserValidationError
from bossflow.models.user import UserCreate

logger = logging.getLogger(__name__)


def _first_violation(error: ValidationError) -> UserValidationError:
    first = error.errors()[0]
    field = str(first["loc"][0]) if first["loc"] else None
    if field == "email":
        return UserValidationError("Invalid email format", field="email")
    return UserValidationError(f"{field}: {first['msg']}", field=field)


def _stats(user: UserModel) -> dict:
    return {
        "diagrams_created": user.diagrams_created,
        "nodes_created": user.nodes_created,
    }


class UserService:
    """User service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def require_user(self, user_id: UUID) -> UserModel:
        """
        Load the account behind an authenticated principal.

        Raises:
            UnauthenticatedError: Token is valid but the account no longer exists
        """
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            logger.warning("Token for unknown account", extra={"user_id": str(user_id)})
            raise UnauthenticatedError("Account no longer exists", {"user_id": str(user_id)})
        return user

    async def register_user(self, username: str, email: str, password: str) -> dict:
        """
        Create an account.

        Args:
            username: At least 3 characters once trimmed
            email: Valid address, stored lowercased
            password: At least 8 characters; only its bcrypt hash is stored

        Returns:
            dict: The created account's public profile

        Raises:
            UserValidationError: Invalid input, or username/email already registered
        """
        try:
            data = UserCreate(username=username, email=email, password=password)
        except ValidationError as e:
            raise _first_violation(e) from e

        if await user_crud.get_by_email(self.db, str(data.email)):
            raise UserValidationError("Email is already registered", field="email")
        if await user_crud.username_taken(self.db, data.username):
            raise UserValidationError("Username is already in use", field="username")

        try:
            user = await user_crud.create_user(self.db, data)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise UserValidationError("Username or email is already registered") from e

        logger.info("User registered", extra={"user_id": str(user.id)})
        return self._to_profile(user)

    async def get_profile(self, user_id: UUID) -> dict:
        """Return the caller's account without its password hash."""
        return self._to_profile(await self.require_user(user_id))

    async def get_stats(self, user_id: UUID) -> dict:
        """
        Return the caller's diagram and node counters.

        Args:
            user_id: Authenticated user's ID

        Returns:
            dict: diagrams_created and nodes_created
        """
        return _stats(await self.require_user(user_id))

    @staticmethod
    def _to_profile(user: UserModel) -> dict:
        return {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "stats": _stats(user),
            "created_at": user.created_at,
            "updated_at": user.updated_at,
        }
