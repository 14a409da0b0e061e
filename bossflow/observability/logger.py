"""
Logger configuration.

Provides configured logger with correlation ID injection.

Dependencies: logging (stdlib), bossflow.configs
System role: Centralized logging configuration
"""

import logging
import sys

from bossflow.observability.correlation import CorrelationIdFilter


def configure_logging(level: str | None = None) -> None:
    """
    Configure Python logging with ISO timestamp and structured format.

    Args:
        level: Root level name; defaults to the configured ``log_level``
    """
    if level is None:
        from bossflow.configs import get_settings

        level = get_settings().log_level

    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.addFilter(CorrelationIdFilter())

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root_logger.setLevel(level.upper())
    root_logger.addHandler(handler)

    # Reduce noise from verbose third-party libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)
