"""
User account and profile schemas.

UserCreate guards account creation; the profile responses expose the
account and its diagram statistics to the owner.

Dependencies: pydantic, email-validator
System role: User API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from bossflow.models.diagram import CamelModel

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 64
PASSWORD_MIN_LENGTH = 8


class UserCreate(BaseModel):
    """Validated input for creating an account."""

    username: str = Field(
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        description="Unique username (3-64 characters once trimmed)",
    )
    email: EmailStr = Field(description="Unique email address")
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, description="Plain-text password")

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def normalise_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class UserStats(CamelModel):
    """Per-user activity counters."""

    diagrams_created: int = Field(description="Diagrams the user has created")
    nodes_created: int = Field(description="Running node count across the user's diagrams")


class UserProfile(CamelModel):
    """Public view of an account; the password hash is never included."""

    id: uuid.UUID
    username: str
    email: str
    stats: UserStats
    created_at: datetime
    updated_at: datetime


class ProfileResponse(CamelModel):
    """Envelope for ``GET /profile``."""

    user: UserProfile


class ProfileStatsResponse(CamelModel):
    """Envelope for ``GET /profile/stats``."""

    stats: UserStats
