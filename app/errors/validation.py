"""Custom validation error handling for FastAPI."""

from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse

from app.errors.base import BaseAppError, ErrorKind, create_exception_handler
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)

# Request sections FastAPI prefixes onto error locations
_LOCATION_PREFIXES = frozenset({"body", "query", "path", "cookie", "header"})


class ValidationError(BaseAppError):
    """Missing or malformed input, optionally with per-field messages."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        detail: str = "Validation failed",
        fields: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(detail, fields=fields)


def _field_name(loc: tuple[int | str, ...]) -> str:
    parts = list(loc)
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(str(part) for part in parts) or "body"


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Render request validation failures as a 400 ValidationError.

    Malformed path identifiers land here too, so a bad ``:id`` never
    reaches the persistence layer.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with one ``{field, message}`` entry per failure.
    """
    exec_error = cast(RequestValidationError, exc)

    fields = [
        {
            "field": _field_name(tuple(error.get("loc", ()))),
            "message": str(error.get("msg", "Invalid value")),
        }
        for error in exec_error.errors()
    ]

    logger.warning(
        "Validation error",
        ip=host(request),
        path=request.url.path,
        errors=fields,
    )

    error = ValidationError(fields=fields)
    return ORJSONResponse(status_code=error.status_code, content=error.to_content())


app_exception_handler = create_exception_handler(logger)
