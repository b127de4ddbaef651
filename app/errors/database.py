from fastapi import Request
from fastapi.responses import ORJSONResponse

from app.errors.base import BaseAppError, ErrorKind
from app.monitoring import get_logger

logger = get_logger(__name__)


class DatabaseError(BaseAppError):
    """Base exception for database errors."""

    kind = ErrorKind.INTERNAL

    def __init__(self, detail: str = "Database Error") -> None:
        super().__init__(detail)


class DuplicateEntryError(DatabaseError):
    """Exception raised when attempting to create a duplicate entry."""

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        detail: str = "A record with this value already exists",
    ) -> None:
        super().__init__(detail)


class RecordNotFoundError(DatabaseError):
    """Exception raised when a record is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        detail: str = "Record not found",
    ) -> None:
        super().__init__(detail)


async def sqlalchemy_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Surface driver/ORM failures that escaped a repository as DatabaseError."""
    error = DatabaseError(detail=f"Database operation failed: {type(exc).__name__}")
    logger.error("Unmapped persistence failure", path=request.url.path, exc_info=exc)
    return ORJSONResponse(content=error.to_content(), status_code=error.status_code)
