# app/routes/comment.py

"""
Comment Routes.

Comments hang off a blog. Anyone signed in may comment; only the comment's
author or an admin may edit or delete it. Listing a blog's comments needs
no authentication.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.auth.permissions import Operation, enforce_ownership, require_policy
from app.dependencies import BlogRepoDep, CommentRepoDep, UserRepoDep
from app.models import CommentDB, UserDB
from app.monitoring import get_logger
from app.schemas import (
    CommentCreate,
    CommentDetailResponse,
    CommentListResponse,
    CommentResponse,
    CommentUpdate,
    MessageResponse,
    UserSummary,
)

router = APIRouter(tags=["💬 Comments"])

logger = get_logger(__name__)

COMMENT_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174444",
    "comment": "Great post!",
    "user": {"id": "123e4567-e89b-12d3-a456-426614174111", "name": "jane doe"},
    "blogId": "123e4567-e89b-12d3-a456-426614174000",
    "createdAt": "2026-01-01T00:00:00Z",
    "updatedAt": None,
}


def to_comment_response(comment: CommentDB, user: UserDB | None) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        comment=comment.text,
        user=UserSummary.model_validate(user) if user else None,
        blog_id=comment.blog_id,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


@router.post(
    "/blog/{blog_id}/comment",
    response_class=ORJSONResponse,
    response_model=CommentDetailResponse,
    status_code=HTTP_201_CREATED,
    summary="Comment on a blog",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "Comment added successfully",
                        "comment": COMMENT_EXAMPLE,
                    },
                },
            },
        },
        401: {"description": "Unauthenticated"},
        404: {"description": "Blog not found"},
    },
    operation_id="comments_create",
)
async def add_comment(
    blog_id: UUID,
    body: CommentCreate,
    user: Annotated[UserDB, Depends(require_policy(Operation.COMMENT_CREATE))],
    blogs: BlogRepoDep,
    comments: CommentRepoDep,
) -> CommentDetailResponse:
    """
    Add a comment to an existing blog.

    Parameters
    ----------
    blog_id : UUID
        Parent blog.
    body : CommentCreate
        Comment text under the ``comment`` key.
    user : UserDB
        Authenticated commenter.
    blogs : BlogRepository
        Used to check the parent exists.
    comments : CommentRepository
        Comment repository dependency.

    Returns
    -------
    CommentDetailResponse
        The stored comment.
    """
    await blogs.get_or_raise(blog_id)
    comment = await comments.add_to_blog(blog_id, user.id, body.comment)
    logger.info("Comment added", comment_id=str(comment.id), blog_id=str(blog_id))
    return CommentDetailResponse(
        message="Comment added successfully",
        comment=to_comment_response(comment, user),
    )


@router.get(
    "/blog/{blog_id}/comments",
    response_class=ORJSONResponse,
    response_model=CommentListResponse,
    summary="List a blog's comments",
    description="Oldest first. No authentication required.",
    responses={404: {"description": "Blog not found"}},
    operation_id="comments_list",
)
async def list_comments(
    blog_id: UUID,
    blogs: BlogRepoDep,
    comments: CommentRepoDep,
) -> CommentListResponse:
    await blogs.get_or_raise(blog_id)
    rows = await comments.list_for_blog(blog_id)
    return CommentListResponse(
        comments=[to_comment_response(comment, author) for comment, author in rows],
    )


@router.put(
    "/comment/{comment_id}",
    response_class=ORJSONResponse,
    response_model=CommentDetailResponse,
    summary="Edit a comment",
    description="Only the comment's author or an admin may edit it.",
    responses={
        401: {"description": "Unauthenticated"},
        403: {"description": "Forbidden"},
        404: {"description": "Comment not found"},
    },
    operation_id="comments_update",
)
async def update_comment(
    comment_id: UUID,
    body: CommentUpdate,
    user: Annotated[UserDB, Depends(require_policy(Operation.COMMENT_EDIT))],
    comments: CommentRepoDep,
    users: UserRepoDep,
) -> CommentDetailResponse:
    comment = await comments.get_or_raise(comment_id)
    enforce_ownership(Operation.COMMENT_EDIT, user, comment.user_id)
    comment = await comments.update_text(comment, body.comment)
    author = user if comment.user_id == user.id else await users.get_by_id(comment.user_id)
    return CommentDetailResponse(
        message="Comment updated successfully",
        comment=to_comment_response(comment, author),
    )


@router.delete(
    "/comment/{comment_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a comment",
    description=(
        "Only the comment's author or an admin may delete it. The comment "
        "disappears from its blog's comment list."
    ),
    responses={
        401: {"description": "Unauthenticated"},
        403: {"description": "Forbidden"},
        404: {"description": "Comment not found"},
    },
    operation_id="comments_delete",
)
async def delete_comment(
    comment_id: UUID,
    user: Annotated[UserDB, Depends(require_policy(Operation.COMMENT_DELETE))],
    comments: CommentRepoDep,
) -> MessageResponse:
    comment = await comments.get_or_raise(comment_id)
    enforce_ownership(Operation.COMMENT_DELETE, user, comment.user_id)
    await comments.delete(comment.id)
    logger.info("Comment deleted", comment_id=str(comment_id), by=str(user.id))
    return MessageResponse(message="Comment deleted successfully")
