"""
Profile API endpoints.

Routes:
- GET /profile - Caller's account (no password hash)
- GET /profile/stats - Caller's diagram and node counters

Dependencies: bossflow.application.services, bossflow.models
System role: Profile HTTP API
"""

from fastapi import APIRouter, Depends

from bossflow.api.deps.auth import Principal, get_current_principal
from bossflow.api.deps.dependencies import get_user_service
from bossflow.api.routers.diagrams.diagram_error_handling import handle_diagram_errors
from bossflow.application.services.user_service import UserService
from bossflow.models.user import ProfileResponse, ProfileStatsResponse, UserProfile, UserStats

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
@handle_diagram_errors
async def get_profile(
    principal: Principal = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
) -> ProfileResponse:
    """
    Get the caller's profile.

    Raises:
        HTTPException(401): Account behind the token no longer exists
    """
    profile = await user_service.get_profile(principal.user_id)
    return ProfileResponse(user=UserProfile(**profile))


@router.get("/stats", response_model=ProfileStatsResponse)
@handle_diagram_errors
async def get_profile_stats(
    principal: Principal = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
) -> ProfileStatsResponse:
    """Get the caller's diagramsCreated and nodesCreated counters."""
    stats = await user_service.get_stats(principal.user_id)
    return ProfileStatsResponse(stats=UserStats(**stats))
