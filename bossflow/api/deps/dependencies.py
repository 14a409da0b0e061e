"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: bossflow.configs, bossflow.application, bossflow.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bossflow.boundary.db import get_async_db
from bossflow.application.services import DiagramService, UserService


def get_diagram_service(db: AsyncSession = Depends(get_async_db)) -> DiagramService:
    """
    Get diagram service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DiagramService: Diagram service instance bound to the request's session
    """
    return DiagramService(db=db)


def get_user_service(db: AsyncSession = Depends(get_async_db)) -> UserService:
    """Get user service instance bound to the request's session."""
    return UserService(db=db)
