"""Authentication and authorization errors."""

from app.errors.base import BaseAppError, ErrorKind


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(detail)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when login credentials are invalid."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class ForbiddenError(BaseAppError):
    """Raised when an authenticated user lacks the role or ownership required."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, detail: str = "Forbidden: insufficient permissions") -> None:
        super().__init__(detail)


class PasswordHashingError(BaseAppError):
    """Raised when the password backend fails to produce a hash."""

    kind = ErrorKind.INTERNAL

    def __init__(self, detail: str = "Password hashing failed") -> None:
        super().__init__(detail)


class TokenError(Exception):
    """Internal credential failure; never rendered to clients directly."""

    reason = "token_invalid"


class TokenExpiredError(TokenError):
    reason = "token_expired"


class InvalidTokenError(TokenError):
    reason = "token_invalid"
