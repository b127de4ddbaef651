from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr, field_validator

from app.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login request body."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: SecretStr = Field(..., min_length=1, examples=["Secret123"])

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class TokenData(BaseModel):
    """Token data schema for extracted token payload."""

    user_id: UUID
    jti: str
    token_type: str = "access"


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
