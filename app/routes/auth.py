# app/routes/auth.py

"""
Authentication Routes.

Registration, cookie based login and logout, and self-service profile
management.

Summary
-------
Endpoints include:
  - Register
  - Login / Logout
  - Get, update and delete the current user (``/me``)
  - Delete a user by id (admin)

Credential Cookie
-----------------
Login and registration set an HTTP-only, secure, SameSite=strict cookie
holding a signed token that expires after one hour.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.auth.permissions import Operation, enforce_ownership, require_policy
from app.configs import settings
from app.dependencies import AuthServiceDep, CredentialsDep, UserDBDep
from app.managers.rate_limiter import limiter
from app.managers.token_manager import CredentialService
from app.models import UserDB
from app.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

router = APIRouter(tags=["🔐 Auth"])

USER_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "name": "jane doe",
    "username": "janedoe",
    "email": "jane@example.com",
    "role": "author",
    "createdAt": "2026-01-01T00:00:00Z",
    "updatedAt": None,
}
UNAUTHENTICATED_EXAMPLE = {
    "description": "Unauthenticated",
    "content": {
        "application/json": {"example": {"detail": "Unauthorized", "kind": "unauthenticated"}},
    },
}


def set_credential_cookie(response: Response, credentials: CredentialService, token: str) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=credentials.max_age,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )


def clear_credential_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )


def to_user_response(user: UserDB) -> UserResponse:
    return UserResponse.model_validate(user)


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description=(
        "Create an account and sign it in. A requested role of `admin`, or any "
        "unknown role, is stored as `reader`."
    ),
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {"message": "User registered successfully", "user": USER_EXAMPLE},
                },
            },
        },
        400: {"description": "Validation error"},
        409: {
            "description": "Email or username taken",
            "content": {
                "application/json": {
                    "example": {"detail": "User already exists", "kind": "conflict"},
                },
            },
        },
        429: {"description": "Rate limit exceeded"},
    },
    operation_id="auth_register",
)
@limiter.limit("10/minute")
async def register(
    request: Request,
    response: Response,
    user: UserCreate,
    auth_service: AuthServiceDep,
    credentials: CredentialsDep,
) -> AuthResponse:
    """
    Register a new user and set the credential cookie.

    Parameters
    ----------
    request : Request
        Current request context, required by the rate limiter.
    response : Response
        Response the cookie is written to.
    user : UserCreate
        Registration payload.
    auth_service : AuthService
        Authentication service dependency.
    credentials : CredentialService
        Used for the cookie lifetime.

    Returns
    -------
    AuthResponse
        The created user, without password.
    """
    db_user = await auth_service.register(user)
    set_credential_cookie(response, credentials, auth_service.issue_token(db_user))
    return AuthResponse(message="User registered successfully", user=to_user_response(db_user))


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Login",
    description="Authenticate with email and password; the credential is returned as a cookie.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Login successful", "user": USER_EXAMPLE},
                },
            },
        },
        401: {
            "description": "Invalid credentials",
            "content": {
                "application/json": {
                    "example": {"detail": "Invalid email or password", "kind": "unauthenticated"},
                },
            },
        },
        429: {"description": "Rate limit exceeded"},
    },
    operation_id="auth_login",
)
@limiter.limit("5/minute")
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    auth_service: AuthServiceDep,
    credentials: CredentialsDep,
) -> AuthResponse:
    user = await auth_service.authenticate(body.email, body.password.get_secret_value())
    set_credential_cookie(response, credentials, auth_service.issue_token(user))
    return AuthResponse(message="Login successful", user=to_user_response(user))


@router.post(
    "/logout",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Logout",
    description="Clear the credential cookie. Needs no authentication.",
    operation_id="auth_logout",
)
async def logout(response: Response) -> MessageResponse:
    clear_credential_cookie(response)
    return MessageResponse(message="Logout successful")


@router.get(
    "/me",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Get current user profile",
    responses={401: UNAUTHENTICATED_EXAMPLE},
    operation_id="auth_me",
)
async def get_me(user: UserDBDep) -> AuthResponse:
    return AuthResponse(message="User profile fetched successfully", user=to_user_response(user))


@router.put(
    "/me",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Update current user profile",
    description=(
        "Update name, username, email or password. Username and email must not "
        "belong to another user; a new password is re-hashed."
    ),
    responses={
        401: UNAUTHENTICATED_EXAMPLE,
        409: {"description": "Username or email already in use"},
    },
    operation_id="auth_update_me",
)
async def update_me(
    changes: UserUpdate,
    user: UserDBDep,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    updated = await auth_service.update_profile(user, changes)
    return AuthResponse(message="Profile updated successfully", user=to_user_response(updated))


@router.delete(
    "/me",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete current user",
    responses={401: UNAUTHENTICATED_EXAMPLE},
    operation_id="auth_delete_me",
)
async def delete_me(
    response: Response,
    user: UserDBDep,
    auth_service: AuthServiceDep,
) -> MessageResponse:
    await auth_service.delete_user(user.id)
    clear_credential_cookie(response)
    return MessageResponse(message="User deleted successfully")


@router.delete(
    "/users/{user_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a user by id",
    description="Admins may delete anyone; other users only themselves.",
    responses={
        401: UNAUTHENTICATED_EXAMPLE,
        403: {"description": "Forbidden"},
        404: {"description": "User not found"},
    },
    operation_id="auth_delete_user",
)
async def delete_user(
    user_id: UUID,
    actor: Annotated[UserDB, Depends(require_policy(Operation.USER_DELETE))],
    auth_service: AuthServiceDep,
) -> MessageResponse:
    """
    Delete a user; admins may target anyone, others only themselves.

    Parameters
    ----------
    user_id : UUID
        Target user.
    actor : UserDB
        Authenticated user; must be an admin or the target.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    MessageResponse
        Confirmation message.
    """
    enforce_ownership(Operation.USER_DELETE, actor, user_id)
    await auth_service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")
