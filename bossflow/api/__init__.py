"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import diagrams_router, health_router, profile_router, templates_router

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(diagrams_router)
api_router.include_router(templates_router)
api_router.include_router(profile_router)

__all__ = ["api_router"]
