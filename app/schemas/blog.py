"""Blog schemas for requests, responses and listing."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.configs.settings import (
    TAXONOMY_NAME_MAX_LENGTH,
    TAXONOMY_NAME_MIN_LENGTH,
    TITLE_MAX_LENGTH,
)
from app.schemas.taxonomy import TaxonomySummary
from app.schemas.user import UserSummary


def _clean_tag_names(names: list[str] | None) -> list[str] | None:
    """Strip, drop blanks and dedupe tag names while keeping their order."""
    if names is None:
        return None

    cleaned: list[str] = []
    for raw in names:
        name = raw.strip()
        if not name or name in cleaned:
            continue
        if not TAXONOMY_NAME_MIN_LENGTH <= len(name) <= TAXONOMY_NAME_MAX_LENGTH:
            mssg = (
                f"Tag name '{name}' must be between {TAXONOMY_NAME_MIN_LENGTH} "
                f"and {TAXONOMY_NAME_MAX_LENGTH} characters"
            )
            raise ValueError(mssg)
        cleaned.append(name)
    return cleaned


class BlogCreate(BaseModel):
    """Blog creation request body."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, examples=["Async Python"])
    content: str = Field(..., min_length=1, examples=["Coroutines are..."])
    category: UUID | None = Field(default=None, description="Existing category ID")
    category_name: str | None = Field(
        default=None,
        alias="categoryName",
        description="Existing category name, used when no ID is given",
    )
    tags: list[UUID] = Field(default_factory=list, description="Existing tag IDs")
    tag_names: list[str] | None = Field(
        default=None,
        alias="tagNames",
        description="Tag names; unknown names are created",
        examples=[["python", "asyncio"]],
    )

    @field_validator("tag_names")
    @classmethod
    def clean_tag_names(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tag_names(v)


class BlogUpdate(BaseModel):
    """
    Partial blog update.

    Tags are only replaced when ``tags`` or ``tagNames`` is sent.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str | None = Field(default=None, min_length=1)
    category: UUID | None = None
    category_name: str | None = Field(default=None, alias="categoryName")
    tags: list[UUID] | None = None
    tag_names: list[str] | None = Field(default=None, alias="tagNames")

    @field_validator("tag_names")
    @classmethod
    def clean_tag_names(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tag_names(v)

    @model_validator(mode="after")
    def check_not_empty(self) -> "BlogUpdate":
        if not self.model_fields_set:
            mssg = "At least one field must be provided"
            raise ValueError(mssg)
        return self

    @property
    def replaces_tags(self) -> bool:
        return self.tags is not None or self.tag_names is not None


class BlogResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    content: str
    author: UserSummary | None = None
    category: TaxonomySummary | None = None
    tags: list[TaxonomySummary] = Field(default_factory=list)
    comments: list[UUID] = Field(default_factory=list, description="Comment IDs, oldest first")
    likes: list[UUID] = Field(default_factory=list)
    dislikes: list[UUID] = Field(default_factory=list)
    published: bool
    views: int
    date: datetime = Field(description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class BlogDetailResponse(BaseModel):
    message: str
    blog: BlogResponse


class BlogListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Blogs fetched successfully"
    blogs: list[BlogResponse]
    total: int
    page: int
    total_pages: int = Field(alias="totalPages")


class ReactionState(StrEnum):
    LIKED = "liked"
    DISLIKED = "disliked"
    NONE = "none"


class ReactionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    reaction: ReactionState
    likes: int
    dislikes: int


class SortField(StrEnum):
    DATE = "date"
    VIEWS = "views"
    TITLE = "title"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"
