from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import UserSummary


class CommentCreate(BaseModel):
    """Comment body; the request key is ``comment``."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    comment: str = Field(..., min_length=1, max_length=5000, examples=["Great post!"])


class CommentUpdate(CommentCreate):
    pass


class CommentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    comment: str
    user: UserSummary | None = None
    blog_id: UUID = Field(alias="blogId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class CommentDetailResponse(BaseModel):
    message: str
    comment: CommentResponse


class CommentListResponse(BaseModel):
    message: str = "Comments fetched successfully"
    comments: list[CommentResponse]
