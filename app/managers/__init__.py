from app.managers.password_manager import PasswordHasher
from app.managers.rate_limiter import limiter, rate_limit_exceeded_handler
from app.managers.token_manager import CredentialService

__all__ = [
    "CredentialService",
    "PasswordHasher",
    "limiter",
    "rate_limit_exceeded_handler",
]
