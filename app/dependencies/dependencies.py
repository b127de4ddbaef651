# app/dependencies/dependencies.py

"""Application dependencies: sessions, credentials, repositories and query containers."""

from dataclasses import dataclass
from typing import Annotated, NoReturn
from uuid import UUID

from fastapi import Depends, Query, Request
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import settings
from app.db import get_session
from app.errors.auth import TokenError, UserAuthenticationError
from app.managers.password_manager import PasswordHasher
from app.managers.token_manager import CredentialService
from app.models import UserDB
from app.monitoring import get_logger
from app.repositories import (
    BlogFilters,
    BlogRepository,
    CategoryRepository,
    CommentRepository,
    TagRepository,
    UserRepository,
)
from app.schemas.blog import SortField, SortOrder
from app.services import AuthService, BlogService

logger = get_logger(__name__)

cookie_scheme = APIKeyCookie(name=settings.COOKIE_NAME, auto_error=False)


def get_credentials(request: Request) -> CredentialService:
    """Credential service built by the application lifespan."""
    return request.app.state.credentials


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


CredentialsDep = Annotated[CredentialService, Depends(get_credentials)]
HasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]
SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_current_user(
    request: Request,
    token: Annotated[str | None, Depends(cookie_scheme)],
    credentials: CredentialsDep,
    session: SessionDep,
) -> UserDB:
    """
    Resolve the credential cookie to a user.

    Every failure is the same 401 to the client; the distinguishing
    reason is only logged.

    Parameters
    ----------
    request : Request
        Incoming request, used for log context.
    token : str | None
        Value of the credential cookie.
    credentials : CredentialService
        Token verifier.
    session : AsyncSession
        Database session.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    UserAuthenticationError
        If the token is missing, invalid, expired or names a deleted user.
    """
    if not token:
        _reject(request, "missing_token")

    try:
        token_data = credentials.verify(token)
    except TokenError as e:
        _reject(request, e.reason)

    user = await UserRepository(session).get_by_id(token_data.user_id)
    if user is None:
        _reject(request, "user_not_found", user_id=str(token_data.user_id))

    return user


def _reject(request: Request, reason: str, **context: str) -> NoReturn:
    logger.info("Authentication failed", reason=reason, path=request.url.path, **context)
    raise UserAuthenticationError


UserDBDep = Annotated[UserDB, Depends(get_current_user)]


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_blog_repository(session: SessionDep) -> BlogRepository:
    return BlogRepository(session)


def get_comment_repository(session: SessionDep) -> CommentRepository:
    return CommentRepository(session)


def get_category_repository(session: SessionDep) -> CategoryRepository:
    return CategoryRepository(session)


def get_tag_repository(session: SessionDep) -> TagRepository:
    return TagRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]
CategoryRepoDep = Annotated[CategoryRepository, Depends(get_category_repository)]
TagRepoDep = Annotated[TagRepository, Depends(get_tag_repository)]


def get_auth_service(
    repo: UserRepoDep,
    hasher: HasherDep,
    credentials: CredentialsDep,
) -> AuthService:
    return AuthService(repo, hasher, credentials)


def get_blog_service(
    blogs: BlogRepoDep,
    categories: CategoryRepoDep,
    tags: TagRepoDep,
    users: UserRepoDep,
) -> BlogService:
    """All four repositories share the request's session, so a blog write is one transaction."""
    return BlogService(blogs, categories, tags, users)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]


@dataclass(frozen=True)
class BlogListQuery:
    """
    Query container for blog listing and filters.

    Parameters
    ----------
    page : int
        1-based page number.
    limit : int
        Maximum number of records to return.
    sort_by : SortField
        Sort column.
    sort_order : SortOrder
        Sort direction.
    filters : BlogFilters
        Author, published, search, category and tag filters.
    """

    page: int = 1
    limit: int = 10
    sort_by: SortField = SortField.DATE
    sort_order: SortOrder = SortOrder.DESC
    filters: BlogFilters = BlogFilters()


def get_blog_list_query(
    page: Annotated[int, Query(ge=1, description="Page number, starting at 1")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of records to return"),
    ] = 10,
    sort_by: Annotated[SortField, Query(alias="sortBy", description="Sort column")] = (
        SortField.DATE
    ),
    sort_order: Annotated[SortOrder, Query(alias="sortOrder", description="Sort direction")] = (
        SortOrder.DESC
    ),
    author: Annotated[UUID | None, Query(description="Author user ID")] = None,
    published: Annotated[bool | None, Query(description="Published state")] = None,
    search: Annotated[
        str | None,
        Query(max_length=200, description="Substring matched against title and content"),
    ] = None,
    category: Annotated[UUID | None, Query(description="Category ID")] = None,
    tag: Annotated[UUID | None, Query(description="Tag ID")] = None,
) -> BlogListQuery:
    """
    Dependency to construct `BlogListQuery` from query parameters.

    Returns
    -------
    BlogListQuery
        Aggregated query parameters object.
    """
    return BlogListQuery(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        filters=BlogFilters(
            author=author,
            published=published,
            search=search.strip() if search and search.strip() else None,
            category=category,
            tag=tag,
        ),
    )


BlogQueryListDep = Annotated[BlogListQuery, Depends(get_blog_list_query)]
