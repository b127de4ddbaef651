"""Repository layer for database operations."""

from app.repositories.blog import BlogFilters, BlogRepository, Reactions
from app.repositories.category import CategoryRepository
from app.repositories.comment import CommentRepository
from app.repositories.tag import TagRepository
from app.repositories.user import UserRepository

__all__ = [
    "BlogFilters",
    "BlogRepository",
    "CategoryRepository",
    "CommentRepository",
    "Reactions",
    "TagRepository",
    "UserRepository",
]
