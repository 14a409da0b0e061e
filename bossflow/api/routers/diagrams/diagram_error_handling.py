"""
Diagram error handling utilities.

Provides a decorator that maps domain exceptions to HTTP responses with a
uniform error body across diagram endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from bossflow.core.exceptions import (
    DiagramNotFoundError,
    DiagramValidationError,
    DuplicateTitleError,
    ErrorReason,
    UnauthenticatedError,
)
from bossflow.models.common import ErrorDetail

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def error_detail(
    message: str,
    reason: ErrorReason | None = None,
    field: str | None = None,
    details: list[str] | None = None,
) -> dict[str, Any]:
    """Build the ``detail`` payload of an error response."""
    return ErrorDetail(
        error=message,
        reason=reason.value if reason else None,
        field=field,
        details=details or [],
    ).model_dump()


def handle_diagram_errors(func: F) -> F:
    """
    Decorator to handle diagram errors and transform them into HTTPExceptions.

    Status mapping:
    - DiagramValidationError -> 400
    - UnauthenticatedError -> 401
    - DiagramNotFoundError -> 404
    - DuplicateTitleError -> 409
    - anything else -> 500 without internal detail
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except DiagramValidationError as e:
            logger.warning(
                "Invalid diagram request",
                extra={"reason": e.reason.value, "field": e.field, "error": e.message}
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=error_detail(e.message, e.reason, e.field, e.errors)
            )

        except UnauthenticatedError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=error_detail(e.message, e.reason),
                headers={"WWW-Authenticate": "Bearer"}
            )

        except DiagramNotFoundError as e:
            logger.info("Diagram not found", extra={"diagram_id": e.diagram_id})
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=error_detail(e.message, e.reason)
            )

        except DuplicateTitleError as e:
            logger.info("Duplicate diagram title", extra={"title": e.title})
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=error_detail(e.message, e.reason, "title")
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure in diagram operation",
                extra={"error": str(e)}
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=error_detail("Internal server error")
            )

    return wrapper  # type: ignore
