"""
Core business logic module.

Contains the exception hierarchy and diagram validation rules.
All business rules and domain-specific logic reside here.
"""

from bossflow.core.exceptions import (
    BossFlowError,
    DiagramNotFoundError,
    DiagramValidationError,
    DuplicateTitleError,
    ErrorReason,
    UnauthenticatedError,
    UserValidationError,
)

__all__ = [
    "BossFlowError",
    "DiagramNotFoundError",
    "DiagramValidationError",
    "DuplicateTitleError",
    "ErrorReason",
    "UnauthenticatedError",
    "UserValidationError",
]
