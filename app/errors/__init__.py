from app.errors.auth import (
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
    PasswordHashingError,
    TokenError,
    TokenExpiredError,
    UserAuthenticationError,
)
from app.errors.base import (
    STATUS_BY_KIND,
    BaseAppError,
    ErrorKind,
    create_exception_handler,
    create_unhandled_exception_handler,
)
from app.errors.database import (
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    sqlalchemy_exception_handler,
)
from app.errors.validation import (
    ValidationError,
    app_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "STATUS_BY_KIND",
    "BaseAppError",
    "DatabaseError",
    "DuplicateEntryError",
    "ErrorKind",
    "ForbiddenError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PasswordHashingError",
    "RecordNotFoundError",
    "TokenError",
    "TokenExpiredError",
    "UserAuthenticationError",
    "ValidationError",
    "app_exception_handler",
    "create_exception_handler",
    "create_unhandled_exception_handler",
    "sqlalchemy_exception_handler",
    "validation_exception_handler",
]
