"""
User schemas for registration, profile management and responses.

Request models accept both snake_case and camelCase keys; responses are
emitted in camelCase.
"""

from datetime import datetime
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)

from app.configs.settings import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)


def _normalize_email(value: str) -> str:
    return value.strip().lower()


class UserCreate(BaseModel):
    """Registration request body."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    name: str = Field(
        ...,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        description="Display name",
        examples=["jane doe"],
    )
    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        description="Username",
        examples=["janedoe"],
    )
    email: EmailStr = Field(..., description="Email address", examples=["jane@example.com"])
    password: SecretStr = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        description="Password",
        examples=["Secret123"],
    )
    role: str | None = Field(
        default=None,
        description="Requested role; admin is never granted on registration",
        examples=["author"],
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class UserUpdate(BaseModel):
    """Self-service profile update; every field is optional."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str | None = Field(
        default=None,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
    )
    username: str | None = Field(
        default=None,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
    )
    email: EmailStr | None = None
    password: SecretStr | None = Field(default=None, min_length=PASSWORD_MIN_LENGTH)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return _normalize_email(v) if v is not None else None

    @model_validator(mode="after")
    def check_not_empty(self) -> "UserUpdate":
        if not self.model_fields_set:
            mssg = "At least one field must be provided"
            raise ValueError(mssg)
        return self


class UserSummary(BaseModel):
    """Compact user reference embedded in blogs and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class UserResponse(BaseModel):
    """Public view of a user; never carries the password hash."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID = Field(..., description="User ID")
    name: str
    username: str
    email: EmailStr
    role: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
