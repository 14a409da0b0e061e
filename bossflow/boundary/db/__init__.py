"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - UserModel, DiagramModel: Core domain entities
  - diagram_crud, user_crud: CRUD operation singletons

Dependencies: sqlalchemy, bossflow.configs
System role: Database adapter providing persistent storage for users and
their diagrams.
"""

from bossflow.boundary.db.base import Base, TimestampMixin, UUIDMixin
from bossflow.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from bossflow.boundary.db.models.user_model import UserModel
from bossflow.boundary.db.models.diagram_model import DiagramModel
from bossflow.boundary.db.CRUD import (
    BaseCRUD,
    DiagramCRUD,
    UserCRUD,
    diagram_crud,
    user_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "UserModel",
    "DiagramModel",
    # CRUD classes
    "BaseCRUD",
    "DiagramCRUD",
    "UserCRUD",
    # CRUD singletons
    "diagram_crud",
    "user_crud",
]
