"""Blog database models using SQLModel."""

from datetime import datetime
from enum import StrEnum
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import Boolean, DateTime, Integer, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.utils.helpers import utc_now


class ReactionKind(StrEnum):
    LIKE = "like"
    DISLIKE = "dislike"


class BlogDB(SQLModel, table=True):
    """
    Blog post database model.

    Tags, reactions and comments live in their own tables keyed by
    ``blog_id`` so that set membership changes are single statements.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )
    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Blog title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog body",
    )
    author_id: UUID | None = Field(
        default=None,
        foreign_key="users.id",
        ondelete="SET NULL",
        nullable=True,
        index=True,
        description="Author user ID",
    )
    category_id: UUID | None = Field(
        default=None,
        foreign_key="categories.id",
        ondelete="SET NULL",
        nullable=True,
        index=True,
        description="Category ID",
    )
    published: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default="false", index=True),
        description="Whether the blog is publicly published",
    )
    views: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
        description="View counter, only ever incremented",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Writing Async Python",
                "content": "Coroutines are...",
                "author_id": "123e4567-e89b-12d3-a456-426614174111",
                "published": False,
                "views": 0,
            },
        },
    )


class BlogTagLink(SQLModel, table=True):
    """Set membership of tags on a blog."""

    __tablename__ = cast("declared_attr[str]", "blog_tags")

    blog_id: UUID = Field(foreign_key="blogs.id", ondelete="CASCADE", primary_key=True)
    tag_id: UUID = Field(foreign_key="tags.id", ondelete="CASCADE", primary_key=True, index=True)


class BlogReactionDB(SQLModel, table=True):
    """
    A user's reaction to a blog.

    The (blog_id, user_id) primary key means a user is never in the
    likes and dislikes of the same blog at once.
    """

    __tablename__ = cast("declared_attr[str]", "blog_reactions")

    blog_id: UUID = Field(foreign_key="blogs.id", ondelete="CASCADE", primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", primary_key=True)
    kind: str = Field(sa_column=Column(String(10), nullable=False))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
