"""
Common response models and utilities.

Generic message and error schemas.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class ErrorDetail(BaseModel):
    """Body of ``detail`` in error responses."""

    error: str = Field(description="Human-readable error message")
    reason: str | None = Field(default=None, description="Machine-readable failure reason")
    field: str | None = Field(default=None, description="Offending field path, if any")
    details: list[str] = Field(default_factory=list, description="Every violation found")
