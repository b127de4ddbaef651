"""
Admin Routes.

Analytics endpoints requiring the admin role: totals, the most viewed
blogs, and an activity log that is not recorded and therefore always empty.
"""

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from app.auth.permissions import AdminUserDep
from app.configs.settings import MOST_VIEWED_LIMIT
from app.dependencies import BlogRepoDep, CommentRepoDep, UserRepoDep
from app.schemas import (
    MostViewedPost,
    MostViewedResponse,
    OverviewResponse,
    UserActivityResponse,
    UserSummary,
)

router = APIRouter(prefix="/admin/analytics", tags=["👑 Admin"])

FORBIDDEN_RESPONSE = {
    "description": "Forbidden",
    "content": {
        "application/json": {
            "example": {"detail": "Forbidden: insufficient permissions", "kind": "forbidden"},
        },
    },
}


@router.get(
    "/overview",
    response_class=ORJSONResponse,
    response_model=OverviewResponse,
    summary="Site totals (admin only)",
    description="Number of blogs, users and comments.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"totalPosts": 12, "totalUsers": 5, "totalComments": 40},
                },
            },
        },
        403: FORBIDDEN_RESPONSE,
    },
    operation_id="admin_overview",
)
async def overview(
    admin_user: AdminUserDep,
    blogs: BlogRepoDep,
    users: UserRepoDep,
    comments: CommentRepoDep,
) -> OverviewResponse:
    return OverviewResponse(
        total_posts=await blogs.count(),
        total_users=await users.count(),
        total_comments=await comments.count(),
    )


@router.get(
    "/most-viewed-posts",
    response_class=ORJSONResponse,
    response_model=MostViewedResponse,
    summary="Most viewed blogs (admin only)",
    description=f"The {MOST_VIEWED_LIMIT} blogs with the highest view counts.",
    responses={403: FORBIDDEN_RESPONSE},
    operation_id="admin_most_viewed",
)
async def most_viewed_posts(admin_user: AdminUserDep, blogs: BlogRepoDep) -> MostViewedResponse:
    """
    Top blogs by views, most viewed first.

    Parameters
    ----------
    admin_user : UserDB
        Authenticated admin.
    blogs : BlogRepository
        Blog repository dependency.

    Returns
    -------
    MostViewedResponse
        Title, views, author and creation date per blog.
    """
    rows = await blogs.most_viewed(MOST_VIEWED_LIMIT)
    return MostViewedResponse(
        posts=[
            MostViewedPost(
                id=blog.id,
                title=blog.title,
                views=blog.views,
                author=UserSummary.model_validate(author) if author else None,
                date=blog.created_at,
            )
            for blog, author in rows
        ],
    )


@router.get(
    "/user-activity",
    response_class=ORJSONResponse,
    response_model=UserActivityResponse,
    summary="User activity log (admin only)",
    description="Activity is not recorded; the log is always empty.",
    responses={403: FORBIDDEN_RESPONSE},
    operation_id="admin_user_activity",
)
async def user_activity(admin_user: AdminUserDep) -> UserActivityResponse:
    return UserActivityResponse()
