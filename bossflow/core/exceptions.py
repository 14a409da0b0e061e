"""
Exception hierarchy for the BossFlow application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from enum import Enum
from typing import Any


class ErrorReason(str, Enum):
    """Machine-readable failure reasons surfaced to API clients."""

    MISSING_FIELD = "MissingField"
    INVALID_TYPE = "InvalidType"
    DUPLICATE_ID = "DuplicateId"
    UNKNOWN_ENDPOINT = "UnknownEndpoint"
    SELF_LOOP = "SelfLoop"
    INVALID_MIME_TYPE = "InvalidMimeType"
    SIZE_EXCEEDED = "SizeExceeded"
    TOO_MANY_IMAGES = "TooManyImages"
    TITLE_TOO_SHORT = "TitleTooShort"
    TITLE_TOO_LONG = "TitleTooLong"
    DESCRIPTION_TOO_LONG = "DescriptionTooLong"
    DUPLICATE_TITLE = "DuplicateTitle"
    NOT_FOUND = "NotFound"
    UNAUTHENTICATED = "Unauthenticated"


class BossFlowError(Exception):
    """Base exception for all BossFlow application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DiagramValidationError(BossFlowError):
    """Raised when a diagram payload fails title or structural validation."""

    def __init__(
        self,
        message: str,
        reason: ErrorReason,
        field: str | None = None,
        errors: list[str] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message for the first violation
            reason: Machine-readable reason of the first violation
            field: Field path that failed validation (e.g. ``nodes[2].position.x``)
            errors: Every violation message, in check order
        """
        self.reason = reason
        self.field = field
        self.errors = errors or [message]
        details: dict[str, Any] = {"reason": reason.value}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DuplicateTitleError(BossFlowError):
    """Raised when the owner already has a diagram with the requested title."""

    reason = ErrorReason.DUPLICATE_TITLE

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__("A diagram with that title already exists", {"title": title})


class DiagramNotFoundError(BossFlowError):
    """Raised when a diagram is missing or owned by someone else."""

    reason = ErrorReason.NOT_FOUND

    def __init__(self, diagram_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize diagram not found error.

        The message is identical for missing and foreign diagrams so that
        callers cannot tell a foreign diagram from a missing one.

        Args:
            diagram_id: ID of the requested diagram
            details: Additional context
        """
        details = details or {}
        details["diagram_id"] = diagram_id
        self.diagram_id = diagram_id
        super().__init__("Diagram not found or not authorised", details)


class UnauthenticatedError(BossFlowError):
    """Raised when a request carries no valid bearer token."""

    reason = ErrorReason.UNAUTHENTICATED


class UserValidationError(BossFlowError):
    """Raised when account data is rejected before it reaches the database."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """
        Initialize user validation error.

        Args:
            message: First violated rule
            field: Offending field (username, email or password)
        """
        self.field = field
        super().__init__(message, {"field": field} if field else None)
