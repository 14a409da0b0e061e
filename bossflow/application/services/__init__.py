"""Service orchestrators."""

from .diagram_service import DiagramService
from .user_service import UserService

__all__ = [
    "DiagramService",
    "UserService",
]
