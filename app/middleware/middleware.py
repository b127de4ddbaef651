# app/middleware/middleware.py
"""
Middleware components for the Quillpress backend.

This module contains middleware for security headers, request logging and
CORS handling, plus the lifespan event handler that builds the persistence
handle, credential service and password hasher and tears them down again.
"""

from asyncio import AbstractEventLoop, get_running_loop
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from os import getpid, kill
from signal import SIGTERM
from time import perf_counter
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs import settings
from app.db import Database
from app.managers import CredentialService, PasswordHasher
from app.monitoring import bind_request_id, clear_context, configure_logging, get_logger
from app.utils.helpers import get_summary, host

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


def _exit_on_loop_error(loop: AbstractEventLoop, context: dict[str, Any]) -> None:
    """Log an error no task handled and ask the server to shut down."""
    logger.critical(
        "Unhandled error in event loop, shutting down",
        message=context.get("message"),
        exc_info=context.get("exception"),
    )
    kill(getpid(), SIGTERM)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events with service initialization."""
    configure_logging()
    logger.info(f"Starting {app.title}...", environment=settings.ENVIRONMENT)

    get_running_loop().set_exception_handler(_exit_on_loop_error)

    try:
        db = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        await db.init()
        app.state.db = db
        app.state.credentials = CredentialService.from_settings()
        app.state.hasher = PasswordHasher()

        if settings.LOG_TO_FILE:
            logger.info("Logging to file enabled", path=settings.LOG_FILE)

        logger.info("Services initialized successfully")
        logger.info("  - API Documentation: http://localhost:8000/docs")
        logger.info("  - Health Check: http://localhost:8000/health")

    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")

    try:
        await db.close()
        logger.info("Services cleaned up successfully")

    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    # Credentials travel in a cookie, so origins must be explicit
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information under a request id."""

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_request_id(request_id)

        start_time = perf_counter()
        route_info = get_summary(request) or f"{request.method} {request.url.path}"
        logger.info("Request", route=route_info, ip=host(request))

        try:
            response = await call_next(request)
            duration = perf_counter() - start_time
            logger.info(
                "Response",
                status=response.status_code,
                method=request.method,
                path=request.url.path,
                duration=f"{duration:.3f}s",
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
