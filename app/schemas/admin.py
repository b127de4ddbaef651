"""Admin analytics schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import UserSummary


class OverviewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_posts: int = Field(alias="totalPosts")
    total_users: int = Field(alias="totalUsers")
    total_comments: int = Field(alias="totalComments")


class MostViewedPost(BaseModel):
    id: UUID
    title: str
    views: int
    author: UserSummary | None = None
    date: datetime


class MostViewedResponse(BaseModel):
    posts: list[MostViewedPost]


class UserActivityResponse(BaseModel):
    """Activity logging is not recorded; ``logs`` is always empty."""

    logs: list[dict[str, Any]] = Field(default_factory=list)
