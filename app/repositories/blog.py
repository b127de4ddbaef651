"""Blog repository for database operations."""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col

from app.errors.database import DatabaseError
from app.models.blog import BlogDB, BlogReactionDB, BlogTagLink, ReactionKind
from app.models.comment import CommentDB
from app.models.tag import TagDB
from app.models.user import UserDB
from app.monitoring import get_logger
from app.repositories.base import BaseRepository, dialect_insert
from app.schemas.blog import BlogCreate, BlogUpdate, ReactionState, SortField, SortOrder
from app.utils.helpers import utc_now

logger = get_logger(__name__)

SORT_COLUMNS = {
    SortField.DATE: BlogDB.created_at,
    SortField.VIEWS: BlogDB.views,
    SortField.TITLE: BlogDB.title,
}


@dataclass(frozen=True, slots=True)
class BlogFilters:
    """Optional listing filters; ``None`` means "do not filter"."""

    author: UUID | None = None
    published: bool | None = None
    search: str | None = None
    category: UUID | None = None
    tag: UUID | None = None


@dataclass(slots=True)
class Reactions:
    likes: list[UUID]
    dislikes: list[UUID]


class BlogRepository(BaseRepository[BlogDB, BlogCreate, BlogUpdate]):
    """
    Repository for Blog database operations.

    Every set-valued attribute of a blog (tags, reactions, comments) is
    stored as rows in its own table, so membership changes are issued as
    single INSERT / DELETE statements rather than read-modify-write of
    the blog row.
    """

    model = BlogDB
    label = "Blog"

    async def create_blog(
        self,
        *,
        title: str,
        content: str,
        author_id: UUID,
        category_id: UUID | None,
    ) -> BlogDB:
        """
        Insert a new, unpublished blog.

        Args:
            title: Blog title
            content: Blog body
            author_id: Acting user, who becomes the author
            category_id: Already resolved category, if any

        Returns:
            BlogDB: Created blog
        """
        blog = BlogDB(
            title=title,
            content=content,
            author_id=author_id,
            category_id=category_id,
            published=False,
            views=0,
        )
        return await self._add_and_refresh(blog)

    async def update_fields(self, blog: BlogDB, **fields: object) -> BlogDB:
        for key, value in fields.items():
            setattr(blog, key, value)
        blog.updated_at = utc_now()
        return await self._add_and_refresh(blog)

    async def set_published(self, blog: BlogDB, *, published: bool) -> BlogDB:
        blog.published = published
        blog.updated_at = utc_now()
        return await self._add_and_refresh(blog)

    async def increment_views(self, blog_id: UUID) -> bool:
        """
        Add one to a blog's view counter in a single UPDATE.

        Returns:
            bool: False if no such blog exists
        """
        statement = (
            update(BlogDB)
            .where(col(BlogDB.id) == blog_id)
            .values(views=col(BlogDB.views) + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        return bool(result.rowcount)

    async def list_blogs(
        self,
        filters: BlogFilters,
        *,
        page: int = 1,
        limit: int = 10,
        sort_by: SortField = SortField.DATE,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> tuple[list[BlogDB], int]:
        """
        Filter, sort and paginate blogs.

        Parameters
        ----------
        filters : BlogFilters
            Conditions combined with AND.
        page : int
            1-based page number.
        limit : int
            Page size.
        sort_by : SortField
            Column to order by; ties are broken by id so pages are stable.
        sort_order : SortOrder
            Ascending or descending.

        Returns
        -------
        tuple[list[BlogDB], int]
            The requested page and the total number of matching blogs.
        """
        conditions = []
        if filters.author is not None:
            conditions.append(col(BlogDB.author_id) == filters.author)
        if filters.published is not None:
            conditions.append(col(BlogDB.published) == filters.published)
        if filters.category is not None:
            conditions.append(col(BlogDB.category_id) == filters.category)
        if filters.tag is not None:
            tagged = select(BlogTagLink.blog_id).where(col(BlogTagLink.tag_id) == filters.tag)
            conditions.append(col(BlogDB.id).in_(tagged))
        if filters.search:
            conditions.append(
                or_(
                    col(BlogDB.title).icontains(filters.search, autoescape=True),
                    col(BlogDB.content).icontains(filters.search, autoescape=True),
                ),
            )
        where = and_(*conditions) if conditions else None

        count_statement = select(func.count()).select_from(BlogDB)
        statement = select(BlogDB)
        if where is not None:
            count_statement = count_statement.where(where)
            statement = statement.where(where)

        sort_column = col(SORT_COLUMNS[sort_by])
        id_column = col(BlogDB.id)
        if sort_order is SortOrder.ASC:
            statement = statement.order_by(sort_column.asc(), id_column.asc())
        else:
            statement = statement.order_by(sort_column.desc(), id_column.desc())
        statement = statement.offset((page - 1) * limit).limit(limit)

        total = (await self.session.execute(count_statement)).scalar() or 0
        blogs = (await self.session.execute(statement)).scalars().all()
        return list(blogs), total

    async def most_viewed(self, limit: int) -> list[tuple[BlogDB, UserDB | None]]:
        statement = (
            select(BlogDB, UserDB)
            .outerjoin(UserDB, col(UserDB.id) == col(BlogDB.author_id))
            .order_by(col(BlogDB.views).desc(), col(BlogDB.created_at).desc())
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return [(blog, author) for blog, author in result.all()]

    # Tags

    async def set_tags(self, blog_id: UUID, tag_ids: Sequence[UUID]) -> None:
        """Replace a blog's tag set."""
        await self.session.execute(
            delete(BlogTagLink).where(col(BlogTagLink.blog_id) == blog_id),
        )
        unique_ids = list(dict.fromkeys(tag_ids))
        if unique_ids:
            statement = (
                dialect_insert(self.session, BlogTagLink)
                .values([{"blog_id": blog_id, "tag_id": tag_id} for tag_id in unique_ids])
                .on_conflict_do_nothing()
            )
            await self.session.execute(statement)

    async def tags_for(self, blog_ids: Sequence[UUID]) -> dict[UUID, list[TagDB]]:
        if not blog_ids:
            return {}
        statement = (
            select(BlogTagLink.blog_id, TagDB)
            .join(TagDB, col(TagDB.id) == col(BlogTagLink.tag_id))
            .where(col(BlogTagLink.blog_id).in_(blog_ids))
            .order_by(col(TagDB.name))
        )
        grouped: dict[UUID, list[TagDB]] = defaultdict(list)
        for blog_id, tag in (await self.session.execute(statement)).all():
            grouped[blog_id].append(tag)
        return grouped

    # Comments

    async def comment_ids_for(self, blog_ids: Sequence[UUID]) -> dict[UUID, list[UUID]]:
        if not blog_ids:
            return {}
        statement = (
            select(CommentDB.blog_id, CommentDB.id)
            .where(col(CommentDB.blog_id).in_(blog_ids))
            .order_by(col(CommentDB.created_at), col(CommentDB.id))
        )
        grouped: dict[UUID, list[UUID]] = defaultdict(list)
        for blog_id, comment_id in (await self.session.execute(statement)).all():
            grouped[blog_id].append(comment_id)
        return grouped

    # Reactions

    async def toggle_reaction(
        self,
        blog_id: UUID,
        user_id: UUID,
        kind: ReactionKind,
    ) -> ReactionState:
        """
        Apply a like or dislike toggle for one user on one blog.

        Removing the same reaction is a conditional DELETE; anything else
        is an upsert on the (blog_id, user_id) key that overwrites the
        opposite reaction. Neither step reads the blog's reaction sets.

        Args:
            blog_id: Blog being reacted to
            user_id: Acting user
            kind: Requested reaction

        Returns:
            ReactionState: The user's reaction after the toggle
        """
        try:
            removed = await self.session.execute(
                delete(BlogReactionDB)
                .where(
                    col(BlogReactionDB.blog_id) == blog_id,
                    col(BlogReactionDB.user_id) == user_id,
                    col(BlogReactionDB.kind) == kind.value,
                )
                .execution_options(synchronize_session=False),
            )
            if removed.rowcount:
                return ReactionState.NONE

            insert = dialect_insert(self.session, BlogReactionDB).values(
                blog_id=blog_id,
                user_id=user_id,
                kind=kind.value,
                created_at=utc_now(),
            )
            statement = insert.on_conflict_do_update(
                index_elements=["blog_id", "user_id"],
                set_={"kind": insert.excluded.kind, "created_at": insert.excluded.created_at},
            )
            await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.exception("Reaction toggle failed", blog_id=str(blog_id))
            raise DatabaseError(detail="Failed to update reaction") from e

        return ReactionState.LIKED if kind is ReactionKind.LIKE else ReactionState.DISLIKED

    async def reactions_for(self, blog_ids: Sequence[UUID]) -> dict[UUID, Reactions]:
        if not blog_ids:
            return {}
        statement = (
            select(BlogReactionDB.blog_id, BlogReactionDB.user_id, BlogReactionDB.kind)
            .where(col(BlogReactionDB.blog_id).in_(blog_ids))
            .order_by(col(BlogReactionDB.created_at))
        )
        grouped: dict[UUID, Reactions] = {}
        for blog_id, user_id, kind in (await self.session.execute(statement)).all():
            reactions = grouped.setdefault(blog_id, Reactions(likes=[], dislikes=[]))
            if kind == ReactionKind.LIKE:
                reactions.likes.append(user_id)
            else:
                reactions.dislikes.append(user_id)
        return grouped

    async def reaction_counts(self, blog_id: UUID) -> tuple[int, int]:
        statement = (
            select(BlogReactionDB.kind, func.count())
            .where(col(BlogReactionDB.blog_id) == blog_id)
            .group_by(col(BlogReactionDB.kind))
        )
        counts = dict((await self.session.execute(statement)).all())
        return counts.get(ReactionKind.LIKE.value, 0), counts.get(ReactionKind.DISLIKE.value, 0)
