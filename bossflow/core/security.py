"""
Password hashing and bearer token decoding.

Dependencies: passlib, python-jose
System role: Credential primitives for account creation and the API
"""

from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from bossflow.core.exceptions import UnauthenticatedError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password with a per-password salt."""
    return pwd_context.hash(password)


def decode_token(token: str, secret: str, algorithm: str) -> dict[str, Any]:
    """
    Decode and verify a JWT, including its expiry.

    Args:
        token: Encoded JWT
        secret: Shared verification secret
        algorithm: Expected signing algorithm

    Returns:
        dict: Token claims

    Raises:
        UnauthenticatedError: If the signature, format or expiry is invalid
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as e:
        raise UnauthenticatedError("Token invalid or expired", {"error": str(e)}) from e
