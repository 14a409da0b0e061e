"""
Bearer token principal resolution.

Resolves the ``Authorization: Bearer <jwt>`` header to the owning user's ID
for every protected route. Tokens are issued by the BossFlow auth service;
this module only verifies them.

Dependencies: fastapi, bossflow.core.security, bossflow.configs
System role: Authentication gate in front of the diagram service
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bossflow.configs import Settings, get_settings
from bossflow.core.exceptions import ErrorReason, UnauthenticatedError
from bossflow.core.security import decode_token
from bossflow.models.common import ErrorDetail

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller."""

    user_id: UUID


class PrincipalResolver:
    """Verifies bearer tokens and extracts the owner identity."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        """
        Args:
            secret: Shared secret the tokens are signed with
            algorithm: Expected JWT algorithm
        """
        self.secret = secret
        self.algorithm = algorithm

    def resolve(self, token: str | None) -> Principal:
        """
        Resolve a raw token to a Principal.

        The user ID is read from the ``userId`` claim, falling back to ``sub``.

        Raises:
            UnauthenticatedError: Missing, invalid or expired token, or no usable user ID
        """
        if not token:
            raise UnauthenticatedError("Token required")

        claims = decode_token(token, self.secret, self.algorithm)
        raw_user_id = claims.get("userId") or claims.get("sub")
        try:
            return Principal(user_id=UUID(str(raw_user_id)))
        except (TypeError, ValueError):
            raise UnauthenticatedError("Token invalid or expired", {"claim": "userId"})


def get_principal_resolver(settings: Settings = Depends(get_settings)) -> PrincipalResolver:
    """
    Build the resolver from auth settings.

    Override this dependency to plug in a different identity source.
    """
    return PrincipalResolver(
        secret=settings.auth.jwt_secret,
        algorithm=settings.auth.jwt_algorithm,
    )


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    resolver: PrincipalResolver = Depends(get_principal_resolver),
) -> Principal:
    """
    FastAPI dependency returning the authenticated caller.

    Raises:
        HTTPException(401): No valid bearer token
    """
    try:
        return resolver.resolve(credentials.credentials if credentials else None)
    except UnauthenticatedError as e:
        logger.info("Rejected unauthenticated request", extra={"error": e.message})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=ErrorDetail(
                error=e.message, reason=ErrorReason.UNAUTHENTICATED.value
            ).model_dump(),
            headers={"WWW-Authenticate": "Bearer"},
        )
