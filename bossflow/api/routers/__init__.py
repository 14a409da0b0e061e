"""API routers."""

from .diagrams import router as diagrams_router
from .diagrams import templates_router
from .health import router as health_router
from .profile import router as profile_router

__all__ = [
    "diagrams_router",
    "health_router",
    "profile_router",
    "templates_router",
]
