"""Blog service: category and tag resolution, writes, reactions and response hydration."""

from collections.abc import Sequence
from uuid import UUID

from app.errors.database import RecordNotFoundError
from app.errors.validation import ValidationError
from app.models import BlogDB, ReactionKind, UserDB
from app.monitoring import get_logger
from app.repositories import (
    BlogFilters,
    BlogRepository,
    CategoryRepository,
    Reactions,
    TagRepository,
    UserRepository,
)
from app.schemas.blog import (
    BlogCreate,
    BlogListResponse,
    BlogResponse,
    BlogUpdate,
    ReactionResponse,
    SortField,
    SortOrder,
)
from app.schemas.taxonomy import TaxonomySummary
from app.schemas.user import UserSummary
from app.utils.helpers import total_pages

logger = get_logger(__name__)

REACTION_MESSAGES = {
    ReactionKind.LIKE: "Blog liked status updated",
    ReactionKind.DISLIKE: "Blog dislike status updated",
}


class BlogService:
    """
    Coordinates the repositories a blog write or read touches.

    Args:
        blogs: Blog repository
        categories: Category repository
        tags: Tag repository
        users: User repository, used to embed author summaries
    """

    def __init__(
        self,
        blogs: BlogRepository,
        categories: CategoryRepository,
        tags: TagRepository,
        users: UserRepository,
    ) -> None:
        self.blogs = blogs
        self.categories = categories
        self.tags = tags
        self.users = users

    async def get_or_raise(self, blog_id: UUID) -> BlogDB:
        return await self.blogs.get_or_raise(blog_id)

    async def resolve_category(
        self,
        category_id: UUID | None,
        category_name: str | None,
    ) -> UUID | None:
        """
        Turn a category reference into an ID.

        A name takes precedence over an ID; either must name an existing
        category.

        Raises:
            ValidationError: If the referenced category does not exist
        """
        if category_name:
            category = await self.categories.get_by_name(category_name)
        elif category_id is not None:
            category = await self.categories.get_by_id(category_id)
        else:
            return None

        if category is None:
            raise ValidationError(
                "Category not found",
                fields=[{"field": "category", "message": "Category not found"}],
            )
        return category.id

    async def resolve_tags(
        self,
        tag_ids: Sequence[UUID],
        tag_names: Sequence[str] | None,
    ) -> list[UUID]:
        """
        Union of existing tag IDs and tags resolved by name.

        Names are find-or-create; IDs must already exist.

        Raises:
            ValidationError: If any tag ID does not exist
        """
        unique_ids = list(dict.fromkeys(tag_ids))
        found = await self.tags.get_many(unique_ids)
        if len(found) != len(unique_ids):
            known = {tag.id for tag in found}
            missing = [str(tag_id) for tag_id in unique_ids if tag_id not in known]
            raise ValidationError(
                "Tag not found",
                fields=[
                    {"field": "tags", "message": f"Unknown tag id {tag_id}"} for tag_id in missing
                ],
            )

        named = await self.tags.resolve_names(tag_names or [])
        return list(dict.fromkeys([*unique_ids, *(tag.id for tag in named)]))

    async def create(self, data: BlogCreate, author: UserDB) -> BlogDB:
        """Create an unpublished blog authored by ``author``."""
        category_id = await self.resolve_category(data.category, data.category_name)
        tag_ids = await self.resolve_tags(data.tags, data.tag_names)

        blog = await self.blogs.create_blog(
            title=data.title,
            content=data.content,
            author_id=author.id,
            category_id=category_id,
        )
        await self.blogs.set_tags(blog.id, tag_ids)
        logger.info("Blog created", blog_id=str(blog.id), author_id=str(author.id))
        return blog

    async def update(self, blog: BlogDB, data: BlogUpdate) -> BlogDB:
        """
        Apply a partial update.

        Title and content change only when given. The category changes
        when either reference is sent, and an explicit null clears it.
        Tags are replaced only when ``tags`` or ``tagNames`` is sent.
        """
        fields: dict[str, object] = {}
        if data.title is not None:
            fields["title"] = data.title
        if data.content is not None:
            fields["content"] = data.content
        if {"category", "category_name"} & data.model_fields_set:
            fields["category_id"] = await self.resolve_category(data.category, data.category_name)

        if data.replaces_tags:
            tag_ids = await self.resolve_tags(data.tags or [], data.tag_names)
            await self.blogs.set_tags(blog.id, tag_ids)

        return await self.blogs.update_fields(blog, **fields)

    async def delete(self, blog_id: UUID) -> None:
        if not await self.blogs.delete(blog_id):
            raise RecordNotFoundError(detail="Blog not found")
        logger.info("Blog deleted", blog_id=str(blog_id))

    async def view(self, blog_id: UUID) -> BlogResponse:
        """Count a view and return the blog with its new view count."""
        if not await self.blogs.increment_views(blog_id):
            raise RecordNotFoundError(detail="Blog not found")
        blog = await self.blogs.get_or_raise(blog_id)
        return (await self.to_responses([blog]))[0]

    async def list_blogs(
        self,
        filters: BlogFilters,
        *,
        page: int,
        limit: int,
        sort_by: SortField,
        sort_order: SortOrder,
    ) -> BlogListResponse:
        blogs, total = await self.blogs.list_blogs(
            filters,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return BlogListResponse(
            blogs=await self.to_responses(blogs),
            total=total,
            page=page,
            total_pages=total_pages(total, limit),
        )

    async def set_published(self, blog: BlogDB, *, published: bool) -> BlogDB:
        blog = await self.blogs.set_published(blog, published=published)
        logger.info("Blog publish state changed", blog_id=str(blog.id), published=published)
        return blog

    async def react(self, blog_id: UUID, user: UserDB, kind: ReactionKind) -> ReactionResponse:
        """
        Toggle ``kind`` for ``user`` on a blog and report the new counts.

        Raises:
            RecordNotFoundError: If the blog does not exist
        """
        await self.blogs.get_or_raise(blog_id)
        state = await self.blogs.toggle_reaction(blog_id, user.id, kind)
        likes, dislikes = await self.blogs.reaction_counts(blog_id)
        return ReactionResponse(
            message=REACTION_MESSAGES[kind],
            reaction=state,
            likes=likes,
            dislikes=dislikes,
        )

    async def to_responses(self, blogs: Sequence[BlogDB]) -> list[BlogResponse]:
        """
        Embed authors, categories, tags, comment IDs and reactions.

        Related rows are fetched with one query per relation for the whole
        page rather than per blog.
        """
        if not blogs:
            return []

        blog_ids = [blog.id for blog in blogs]
        author_ids = list({blog.author_id for blog in blogs if blog.author_id is not None})
        category_ids = list({blog.category_id for blog in blogs if blog.category_id is not None})

        authors = {user.id: user for user in await self.users.get_many(author_ids)}
        categories = {c.id: c for c in await self.categories.get_many(category_ids)}
        tags = await self.blogs.tags_for(blog_ids)
        comments = await self.blogs.comment_ids_for(blog_ids)
        reactions = await self.blogs.reactions_for(blog_ids)

        responses = []
        for blog in blogs:
            author = authors.get(blog.author_id) if blog.author_id else None
            category = categories.get(blog.category_id) if blog.category_id else None
            blog_reactions = reactions.get(blog.id, Reactions(likes=[], dislikes=[]))
            responses.append(
                BlogResponse(
                    id=blog.id,
                    title=blog.title,
                    content=blog.content,
                    author=UserSummary.model_validate(author) if author else None,
                    category=TaxonomySummary.model_validate(category) if category else None,
                    tags=[TaxonomySummary.model_validate(tag) for tag in tags.get(blog.id, [])],
                    comments=comments.get(blog.id, []),
                    likes=blog_reactions.likes,
                    dislikes=blog_reactions.dislikes,
                    published=blog.published,
                    views=blog.views,
                    date=blog.created_at,
                    updated_at=blog.updated_at,
                ),
            )
        return responses
