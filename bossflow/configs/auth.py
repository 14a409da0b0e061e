"""
Authentication configuration settings.

Holds the parameters used to verify bearer tokens issued by the
BossFlow auth service.

Dependencies: pydantic, pydantic_settings
System role: Token verification configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from bossflow.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """JWT verification configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str = Field(
        default="change-me",
        description="Shared secret used to verify HS256 bearer tokens",
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
