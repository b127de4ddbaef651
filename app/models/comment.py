"""Comment database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel

from app.utils.helpers import utc_now


class CommentDB(SQLModel, table=True):
    """Comment left by a user on a blog; a blog's comment list is ordered by ``created_at``."""

    __tablename__ = cast("declared_attr[str]", "comments")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    text: str = Field(sa_column=Column(Text, nullable=False))
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    blog_id: UUID = Field(foreign_key="blogs.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
    )
