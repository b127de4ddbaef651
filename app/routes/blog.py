# app/routes/blog.py

"""
Blog Routes.

Summary
-------
Endpoints include:
  - Create blog (writers)
  - List blogs with filters, sorting and pagination
  - Get blog by id (counts a view)
  - Update / delete blog (writers)
  - Like / dislike toggles
  - Publish / unpublish (admin or author of the blog)

Access
------
Every route needs the credential cookie. Role gates and ownership rules
come from ``app.auth.permissions.ACCESS_POLICIES``.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.auth.permissions import Operation, enforce_ownership, require_policy
from app.dependencies import BlogQueryListDep, BlogServiceDep
from app.models import ReactionKind, UserDB
from app.schemas import (
    BlogCreate,
    BlogDetailResponse,
    BlogListResponse,
    BlogUpdate,
    MessageResponse,
    ReactionResponse,
)
from app.services import BlogService

router = APIRouter(tags=["📝 Blogs"])

BlogReaderDep = Annotated[UserDB, Depends(require_policy(Operation.BLOG_READ))]

BLOG_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "title": "Async Python",
    "content": "Coroutines are...",
    "author": {"id": "123e4567-e89b-12d3-a456-426614174111", "name": "jane doe"},
    "category": {"id": "123e4567-e89b-12d3-a456-426614174222", "name": "python"},
    "tags": [{"id": "123e4567-e89b-12d3-a456-426614174333", "name": "asyncio"}],
    "comments": [],
    "likes": [],
    "dislikes": [],
    "published": False,
    "views": 0,
    "date": "2026-01-01T00:00:00Z",
    "updatedAt": None,
}
COMMON_RESPONSES: dict[int | str, dict] = {
    401: {"description": "Unauthenticated"},
    403: {"description": "Forbidden"},
}
NOT_FOUND_RESPONSE = {
    "description": "Blog not found",
    "content": {
        "application/json": {"example": {"detail": "Blog not found", "kind": "not_found"}},
    },
}


@router.post(
    "/createblog",
    response_class=ORJSONResponse,
    response_model=BlogDetailResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a blog",
    description=(
        "Create an unpublished blog authored by the caller. `category` is a category id, "
        "`categoryName` an existing category name. `tags` are tag ids; `tagNames` are "
        "resolved by name and created when missing."
    ),
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {"message": "Blog created successfully", "blog": BLOG_EXAMPLE},
                },
            },
        },
        400: {
            "description": "Validation error or unknown category",
            "content": {
                "application/json": {
                    "example": {"detail": "Category not found", "kind": "validation_error"},
                },
            },
        },
        **COMMON_RESPONSES,
    },
    operation_id="blogs_create",
)
async def create_blog(
    blog: BlogCreate,
    user: Annotated[UserDB, Depends(require_policy(Operation.BLOG_CREATE))],
    service: BlogServiceDep,
) -> BlogDetailResponse:
    """
    Create a blog.

    Parameters
    ----------
    blog : BlogCreate
        Blog payload.
    user : UserDB
        Authenticated admin, editor or author.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogDetailResponse
        The created blog with embedded references.
    """
    db_blog = await service.create(blog, user)
    [response] = await service.to_responses([db_blog])
    return BlogDetailResponse(message="Blog created successfully", blog=response)


@router.get(
    "/blogs",
    response_class=ORJSONResponse,
    response_model=BlogListResponse,
    summary="List blogs",
    description=(
        "Paginated list. Filters: `author`, `published`, `search` (substring of title "
        "or content), `category`, `tag`. Sorting: `sortBy` date | views | title and "
        "`sortOrder` asc | desc."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "Blogs fetched successfully",
                        "blogs": [BLOG_EXAMPLE],
                        "total": 1,
                        "page": 1,
                        "totalPages": 1,
                    },
                },
            },
        },
        **COMMON_RESPONSES,
    },
    operation_id="blogs_list",
)
async def list_blogs(
    query: BlogQueryListDep,
    user: BlogReaderDep,
    service: BlogServiceDep,
) -> BlogListResponse:
    return await service.list_blogs(
        query.filters,
        page=query.page,
        limit=query.limit,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
    )


@router.get(
    "/blog/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogDetailResponse,
    summary="Get blog by id",
    description="Fetch one blog. Each successful fetch adds one to its view count.",
    responses={404: NOT_FOUND_RESPONSE, **COMMON_RESPONSES},
    operation_id="blogs_get",
)
async def get_blog(
    blog_id: UUID,
    user: BlogReaderDep,
    service: BlogServiceDep,
) -> BlogDetailResponse:
    blog = await service.view(blog_id)
    return BlogDetailResponse(message="Blog fetched successfully", blog=blog)


@router.put(
    "/blog/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogDetailResponse,
    summary="Update blog",
    description="Partial update. Tags are replaced only when `tags` or `tagNames` is sent.",
    responses={404: NOT_FOUND_RESPONSE, **COMMON_RESPONSES},
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: UUID,
    changes: BlogUpdate,
    user: Annotated[UserDB, Depends(require_policy(Operation.BLOG_UPDATE))],
    service: BlogServiceDep,
) -> BlogDetailResponse:
    blog = await service.get_or_raise(blog_id)
    enforce_ownership(Operation.BLOG_UPDATE, user, blog.author_id)
    blog = await service.update(blog, changes)
    [response] = await service.to_responses([blog])
    return BlogDetailResponse(message="Blog updated successfully", blog=response)


@router.delete(
    "/blog/{blog_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete blog",
    description="Deleting a blog also deletes its comments, reactions and tag links.",
    responses={404: NOT_FOUND_RESPONSE, **COMMON_RESPONSES},
    operation_id="blogs_delete",
)
async def delete_blog(
    blog_id: UUID,
    user: Annotated[UserDB, Depends(require_policy(Operation.BLOG_DELETE))],
    service: BlogServiceDep,
) -> MessageResponse:
    blog = await service.get_or_raise(blog_id)
    enforce_ownership(Operation.BLOG_DELETE, user, blog.author_id)
    await service.delete(blog.id)
    return MessageResponse(message="Blog deleted successfully")


@router.post(
    "/blog/{blog_id}/like",
    response_class=ORJSONResponse,
    response_model=ReactionResponse,
    summary="Toggle like",
    description="Like the blog, or remove an existing like. Liking clears a dislike.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "Blog liked status updated",
                        "reaction": "liked",
                        "likes": 1,
                        "dislikes": 0,
                    },
                },
            },
        },
        404: NOT_FOUND_RESPONSE,
        **COMMON_RESPONSES,
    },
    operation_id="blogs_like",
)
async def like_blog(
    blog_id: UUID,
    user: Annotated[UserDB, Depends(require_policy(Operation.BLOG_REACT))],
    service: BlogServiceDep,
) -> ReactionResponse:
    return await service.react(blog_id, user, ReactionKind.LIKE)


@router.post(
    "/blog/{blog_id}/dislike",
    response_class=ORJSONResponse,
    response_model=ReactionResponse,
    summary="Toggle dislike",
    description="Dislike the blog, or remove an existing dislike. Disliking clears a like.",
    responses={404: NOT_FOUND_RESPONSE, **COMMON_RESPONSES},
    operation_id="blogs_dislike",
)
async def dislike_blog(
    blog_id: UUID,
    user: Annotated[UserDB, Depends(require_policy(Operation.BLOG_REACT))],
    service: BlogServiceDep,
) -> ReactionResponse:
    return await service.react(blog_id, user, ReactionKind.DISLIKE)


async def _set_published(
    blog_id: UUID,
    user: UserDB,
    service: BlogService,
    *,
    published: bool,
) -> BlogDetailResponse:
    blog = await service.get_or_raise(blog_id)
    enforce_ownership(Operation.BLOG_PUBLISH, user, blog.author_id)
    blog = await service.set_published(blog, published=published)
    [response] = await service.to_responses([blog])
    message = "Blog published" if published else "Blog unpublished"
    return BlogDetailResponse(message=message, blog=response)


@router.put(
    "/blog/{blog_id}/publish",
    response_class=ORJSONResponse,
    response_model=BlogDetailResponse,
    summary="Publish blog",
    description="Admins may publish any blog; editors and authors only their own.",
    responses={404: NOT_FOUND_RESPONSE, **COMMON_RESPONSES},
    operation_id="blogs_publish",
)
async def publish_blog(
    blog_id: UUID,
    user: Annotated[UserDB, Depends(require_policy(Operation.BLOG_PUBLISH))],
    service: BlogServiceDep,
) -> BlogDetailResponse:
    return await _set_published(blog_id, user, service, published=True)


@router.put(
    "/blog/{blog_id}/unpublish",
    response_class=ORJSONResponse,
    response_model=BlogDetailResponse,
    summary="Unpublish blog",
    description="Admins may unpublish any blog; editors and authors only their own.",
    responses={404: NOT_FOUND_RESPONSE, **COMMON_RESPONSES},
    operation_id="blogs_unpublish",
)
async def unpublish_blog(
    blog_id: UUID,
    user: Annotated[UserDB, Depends(require_policy(Operation.BLOG_PUBLISH))],
    service: BlogServiceDep,
) -> BlogDetailResponse:
    return await _set_published(blog_id, user, service, published=False)
