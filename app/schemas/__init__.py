from app.schemas.admin import (
    MostViewedPost,
    MostViewedResponse,
    OverviewResponse,
    UserActivityResponse,
)
from app.schemas.auth import AuthResponse, LoginRequest, TokenData
from app.schemas.blog import (
    BlogCreate,
    BlogDetailResponse,
    BlogListResponse,
    BlogResponse,
    BlogUpdate,
    ReactionResponse,
    ReactionState,
    SortField,
    SortOrder,
)
from app.schemas.comment import (
    CommentCreate,
    CommentDetailResponse,
    CommentListResponse,
    CommentResponse,
    CommentUpdate,
)
from app.schemas.common import HealthCheckResponse, MessageResponse
from app.schemas.taxonomy import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
    TagCreate,
    TagDetailResponse,
    TagListResponse,
    TagResponse,
    TagUpdate,
    TaxonomySummary,
)
from app.schemas.user import UserCreate, UserResponse, UserSummary, UserUpdate

__all__ = [
    "AuthResponse",
    "BlogCreate",
    "BlogDetailResponse",
    "BlogListResponse",
    "BlogResponse",
    "BlogUpdate",
    "CategoryCreate",
    "CategoryDetailResponse",
    "CategoryListResponse",
    "CategoryResponse",
    "CategoryUpdate",
    "CommentCreate",
    "CommentDetailResponse",
    "CommentListResponse",
    "CommentResponse",
    "CommentUpdate",
    "HealthCheckResponse",
    "LoginRequest",
    "MessageResponse",
    "MostViewedPost",
    "MostViewedResponse",
    "OverviewResponse",
    "ReactionResponse",
    "ReactionState",
    "SortField",
    "SortOrder",
    "TagCreate",
    "TagDetailResponse",
    "TagListResponse",
    "TagResponse",
    "TagUpdate",
    "TaxonomySummary",
    "TokenData",
    "UserActivityResponse",
    "UserCreate",
    "UserResponse",
    "UserSummary",
    "UserUpdate",
]
