"""
Diagrams router package.

Exports the routers for diagram and template endpoints.
"""

from .diagrams_router import router, templates_router

__all__ = ["router", "templates_router"]
