"""
Schema guards for single diagram entities.

Pure predicates that check the shape of one node, edge, image reference,
title or description. Each guard returns the first failing check as a
GuardResult; checks run in a fixed order so messages are stable.

Dependencies: bossflow.core.exceptions
System role: Leaf validation rules used by the structural validator
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from bossflow.core.exceptions import ErrorReason

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5 MiB
MAX_DIAGRAM_IMAGES = 10

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


@dataclass(frozen=True)
class GuardResult:
    """Outcome of a single guard.

    ``ok`` is True when the entity passed; otherwise ``reason``, ``field``
    and ``message`` describe the first violated rule.
    """

    ok: bool
    reason: ErrorReason | None = None
    field: str | None = None
    message: str | None = None

    @classmethod
    def passed(cls) -> "GuardResult":
        return cls(ok=True)

    @classmethod
    def failed(cls, reason: ErrorReason, field: str, message: str) -> "GuardResult":
        return cls(ok=False, reason=reason, field=field, message=message)


def is_number(value: Any) -> bool:
    """True for finite JSON numbers; booleans, NaN and infinities are excluded."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _check_required_string(entity: dict, key: str, path: str) -> GuardResult:
    value = entity.get(key)
    if value is None or value == "":
        return GuardResult.failed(
            ErrorReason.MISSING_FIELD,
            f"{path}.{key}",
            f"{path}: the '{key}' field is required and must be a non-empty string",
        )
    if not isinstance(value, str):
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE,
            f"{path}.{key}",
            f"{path}: the '{key}' field must be a string",
        )
    if not value.strip():
        return GuardResult.failed(
            ErrorReason.MISSING_FIELD,
            f"{path}.{key}",
            f"{path}: the '{key}' field is required and must be a non-empty string",
        )
    return GuardResult.passed()


def _is_valid_date(value: Any) -> bool:
    if isinstance(value, datetime):
        return True
    if not isinstance(value, str):
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_image(image: Any, path: str = "image") -> GuardResult:
    """
    Check an image reference.

    Args:
        image: Candidate ``{filename, url, mimeType, size}`` mapping
        path: Field path used in error messages

    Returns:
        GuardResult: First failure, or a passing result
    """
    if not isinstance(image, dict):
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE, path, f"{path}: must be a valid object"
        )

    for key in ("filename", "url"):
        result = _check_required_string(image, key, path)
        if not result.ok:
            return result

    mime_type = image.get("mimeType")
    if mime_type is None or mime_type == "":
        return GuardResult.failed(
            ErrorReason.MISSING_FIELD,
            f"{path}.mimeType",
            f"{path}: the 'mimeType' field is required and must be a string",
        )
    if mime_type not in ALLOWED_MIME_TYPES:
        return GuardResult.failed(
            ErrorReason.INVALID_MIME_TYPE,
            f"{path}.mimeType",
            f"{path}: 'mimeType' must be one of: {', '.join(ALLOWED_MIME_TYPES)}",
        )

    size = image.get("size")
    if size is None:
        return GuardResult.failed(
            ErrorReason.MISSING_FIELD,
            f"{path}.size",
            f"{path}: the 'size' field is required and must be a number",
        )
    if not is_number(size):
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE,
            f"{path}.size",
            f"{path}: the 'size' field must be a number",
        )
    if size < 0:
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE,
            f"{path}.size",
            f"{path}: 'size' must be greater than or equal to 0",
        )
    if size > MAX_IMAGE_SIZE:
        return GuardResult.failed(
            ErrorReason.SIZE_EXCEEDED,
            f"{path}.size",
            f"{path}: 'size' cannot exceed {MAX_IMAGE_SIZE} bytes (5MB)",
        )

    if "createdAt" in image and not _is_valid_date(image["createdAt"]):
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE,
            f"{path}.createdAt",
            f"{path}: 'createdAt' must be a valid date",
        )

    return GuardResult.passed()


def validate_node(node: Any, path: str = "node") -> GuardResult:
    """
    Check a node's mandatory fields and position types.

    The optional ``image`` is not inspected here; the structural validator
    checks it once node identity has been established.

    Args:
        node: Candidate node mapping
        path: Field path used in error messages

    Returns:
        GuardResult: First failure, or a passing result
    """
    if not isinstance(node, dict):
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE, path, f"{path}: must be a valid object"
        )

    for key in ("id", "type"):
        result = _check_required_string(node, key, path)
        if not result.ok:
            return result

    position = node.get("position")
    if position is None:
        return GuardResult.failed(
            ErrorReason.MISSING_FIELD,
            f"{path}.position",
            f"{path}: the 'position' field is required and must be an object",
        )
    if not isinstance(position, dict):
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE,
            f"{path}.position",
            f"{path}: the 'position' field must be an object",
        )
    for axis in ("x", "y"):
        if not is_number(position.get(axis)):
            return GuardResult.failed(
                ErrorReason.INVALID_TYPE,
                f"{path}.position.{axis}",
                f"{path}: 'position.{axis}' must be a number",
            )

    data = node.get("data")
    if data is None:
        return GuardResult.failed(
            ErrorReason.MISSING_FIELD,
            f"{path}.data",
            f"{path}: the 'data' field is required (may be an empty object {{}})",
        )
    if not isinstance(data, dict):
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE,
            f"{path}.data",
            f"{path}: the 'data' field must be an object",
        )

    return GuardResult.passed()


def validate_edge(edge: Any, path: str = "edge") -> GuardResult:
    """
    Check an edge's mandatory fields.

    Endpoint existence and self-loops are cross-entity rules and belong to
    the structural validator.
    """
    if not isinstance(edge, dict):
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE, path, f"{path}: must be a valid object"
        )

    for key in ("id", "source", "target"):
        result = _check_required_string(edge, key, path)
        if not result.ok:
            return result

    return GuardResult.passed()


def validate_title(title: Any) -> GuardResult:
    """Check a diagram title: 3 to 100 characters once trimmed."""
    if title is None:
        return GuardResult.failed(
            ErrorReason.MISSING_FIELD,
            "title",
            "Title is required and must be at least 3 characters",
        )
    if not isinstance(title, str):
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE, "title", "Title must be a string"
        )
    trimmed = title.strip()
    if len(trimmed) < TITLE_MIN_LENGTH:
        return GuardResult.failed(
            ErrorReason.TITLE_TOO_SHORT,
            "title",
            f"The title must be at least {TITLE_MIN_LENGTH} characters",
        )
    if len(trimmed) > TITLE_MAX_LENGTH:
        return GuardResult.failed(
            ErrorReason.TITLE_TOO_LONG,
            "title",
            f"The title cannot exceed {TITLE_MAX_LENGTH} characters",
        )
    return GuardResult.passed()


def validate_description(description: Any) -> GuardResult:
    """Check an optional description: a string of at most 500 characters."""
    if description is None:
        return GuardResult.passed()
    if not isinstance(description, str):
        return GuardResult.failed(
            ErrorReason.INVALID_TYPE, "description", "Description must be a string"
        )
    if len(description.strip()) > DESCRIPTION_MAX_LENGTH:
        return GuardResult.failed(
            ErrorReason.DESCRIPTION_TOO_LONG,
            "description",
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters",
        )
    return GuardResult.passed()
