"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, bossflow.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bossflow.boundary.db.connection import get_async_engine
from bossflow.boundary.db.create_tables import create_all_tables
from bossflow.configs import get_settings
from bossflow.core.exceptions import ErrorReason
from bossflow.models.common import ErrorDetail
from bossflow.observability import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)
from . import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    # Startup
    if settings.database.auto_create_tables:
        await create_all_tables()
    logger.info("BossFlow API started", extra={"environment": settings.environment})

    yield

    # Shutdown
    await get_async_engine().dispose()
    logger.info("Database engine disposed")


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 with the standard error body."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or None

    logger.info(
        "Rejected malformed request",
        extra={"path": request.url.path, "field": field}
    )

    detail = ErrorDetail(
        error=first.get("msg", "Invalid request body"),
        reason=ErrorReason.INVALID_TYPE.value,
        field=field,
        details=[error.get("msg", "") for error in errors],
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail.model_dump()},
    )


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()

    app = FastAPI(
        title="BossFlow API",
        description="Owner-scoped storage for flow-chart tactic diagrams",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "bossflow.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
