"""API-specific dependencies."""

from .auth import Principal, PrincipalResolver, get_current_principal, get_principal_resolver
from .dependencies import get_diagram_service, get_user_service

__all__ = [
    "Principal",
    "PrincipalResolver",
    "get_current_principal",
    "get_diagram_service",
    "get_principal_resolver",
    "get_user_service",
]
