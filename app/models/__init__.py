"""Database models for the application."""

from app.models.blog import BlogDB, BlogReactionDB, BlogTagLink, ReactionKind
from app.models.category import CategoryDB
from app.models.comment import CommentDB
from app.models.tag import TagDB
from app.models.user import Role, UserDB

__all__ = [
    "BlogDB",
    "BlogReactionDB",
    "BlogTagLink",
    "CategoryDB",
    "CommentDB",
    "ReactionKind",
    "Role",
    "TagDB",
    "UserDB",
]
