"""
Observability module.

Provides structured logging, correlation ID tracking and request logging.
"""

from bossflow.observability.correlation import get_correlation_id, set_correlation_id
from bossflow.observability.logger import configure_logging
from bossflow.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
    "CorrelationMiddleware",
    "RequestLoggingMiddleware",
]
