"""Credential service issuing and verifying signed, time-limited JWTs."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from jose import ExpiredSignatureError, JWTError, jwt

from app.configs import settings
from app.errors import InvalidTokenError, TokenExpiredError
from app.schemas.auth import TokenData

ACCESS_TOKEN_TYPE = "access"


class CredentialService:
    """
    Issues and verifies the signed credential token bound to a user id.

    Built once in the application lifespan and injected into request
    handlers; nothing reads signing material from module globals.

    Args:
        secret_key: HMAC signing secret.
        algorithm: JWT signing algorithm.
        expire_minutes: Token lifetime.
        issuer: ``iss`` claim written and required.
        audience: ``aud`` claim written and required.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_settings(cls) -> "CredentialService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
        )

    @property
    def max_age(self) -> int:
        """Token lifetime in seconds, used for the cookie Max-Age."""
        return self.expire_minutes * 60

    def issue(self, user_id: UUID, expires_delta: timedelta | None = None) -> str:
        """
        Create a new access token for ``user_id``.

        Args:
            user_id: Subject of the token.
            expires_delta: Override of the configured lifetime.

        Returns:
            str: Encoded JWT.
        """
        now = datetime.now(UTC)
        expire = now + (expires_delta or timedelta(minutes=self.expire_minutes))

        to_encode = {
            "sub": str(user_id),
            "jti": str(uuid4()),
            "iat": now,
            "exp": expire,
            "type": ACCESS_TOKEN_TYPE,
        }
        if self.issuer:
            to_encode["iss"] = self.issuer
        if self.audience:
            to_encode["aud"] = self.audience

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenData:
        """
        Decode and validate a token.

        Args:
            token: JWT string.

        Returns:
            TokenData: The decoded claims.

        Raises:
            TokenExpiredError: If the signature is valid but ``exp`` has passed.
            InvalidTokenError: For any other malformed, tampered or foreign token.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except JWTError as e:
            raise InvalidTokenError from e

        subject: str | None = payload.get("sub")
        jti: str | None = payload.get("jti")
        token_type: str | None = payload.get("type")
        if not subject or not jti or token_type != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError

        try:
            user_id = UUID(subject)
        except ValueError as e:
            raise InvalidTokenError from e

        return TokenData(user_id=user_id, jti=jti, token_type=token_type)
