"""Comment repository for database operations."""

from uuid import UUID

from sqlalchemy import select
from sqlmodel import col

from app.models.comment import CommentDB
from app.models.user import UserDB
from app.repositories.base import BaseRepository
from app.schemas.comment import CommentCreate, CommentUpdate
from app.utils.helpers import utc_now


class CommentRepository(BaseRepository[CommentDB, CommentCreate, CommentUpdate]):
    """
    Repository for Comment database operations.

    A blog's comment list is not stored on the blog; it is the set of
    comment rows carrying its ``blog_id``, oldest first. Removing a row
    therefore removes it from the list.
    """

    model = CommentDB
    label = "Comment"

    async def add_to_blog(self, blog_id: UUID, user_id: UUID, text: str) -> CommentDB:
        comment = CommentDB(text=text, blog_id=blog_id, user_id=user_id)
        return await self._add_and_refresh(comment)

    async def list_for_blog(self, blog_id: UUID) -> list[tuple[CommentDB, UserDB | None]]:
        """
        Comments on a blog, oldest first, each paired with its author.

        Args:
            blog_id: Parent blog ID

        Returns:
            list[tuple[CommentDB, UserDB | None]]: Comment and author pairs
        """
        statement = (
            select(CommentDB, UserDB)
            .outerjoin(UserDB, col(UserDB.id) == col(CommentDB.user_id))
            .where(col(CommentDB.blog_id) == blog_id)
            .order_by(col(CommentDB.created_at), col(CommentDB.id))
        )
        result = await self.session.execute(statement)
        return [(comment, user) for comment, user in result.all()]

    async def update_text(self, comment: CommentDB, text: str) -> CommentDB:
        comment.text = text
        comment.updated_at = utc_now()
        return await self._add_and_refresh(comment)
