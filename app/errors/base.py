from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from structlog.stdlib import BoundLogger

from app.configs import settings
from app.configs.settings import DEFAULT_ERROR_MESSAGE
from app.utils.helpers import host


class ErrorKind(StrEnum):
    """Outward error categories every application error maps onto."""

    VALIDATION = "validation_error"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHENTICATED: HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: HTTP_500_INTERNAL_SERVER_ERROR,
}


class BaseAppError(Exception):
    """Base exception class for application errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        detail: str = DEFAULT_ERROR_MESSAGE,
        kind: ErrorKind | None = None,
        fields: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        if kind is not None:
            self.kind = kind
        self.fields = fields or []

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def __str__(self) -> str:
        return self.detail

    def to_content(self) -> dict[str, Any]:
        """Render the error body, redacting internal details in production."""
        detail = self.detail
        if self.kind is ErrorKind.INTERNAL and settings.is_production:
            detail = DEFAULT_ERROR_MESSAGE

        content: dict[str, Any] = {"detail": detail, "kind": self.kind.value}
        if self.fields:
            content["errors"] = self.fields
        return content


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        if not isinstance(exc, BaseAppError):
            exc = BaseAppError()

        log = logger.error if exc.kind is ErrorKind.INTERNAL else logger.warning
        log(
            "Request failed",
            kind=exc.kind.value,
            detail=exc.detail,
            ip=host(request),
            path=request.url.path,
        )
        return ORJSONResponse(content=exc.to_content(), status_code=exc.status_code)

    return handler


def create_unhandled_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """Handler for exceptions nothing else claimed; always an internal error."""

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            ip=host(request),
            exc_info=exc,
        )
        error = BaseAppError(detail=f"{type(exc).__name__}: {exc}")
        return ORJSONResponse(content=error.to_content(), status_code=error.status_code)

    return handler
