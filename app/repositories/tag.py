"""Tag repository for database operations."""

from collections.abc import Sequence
from uuid import uuid4

from sqlalchemy import select
from sqlmodel import col

from app.errors.database import DuplicateEntryError
from app.models.tag import TagDB
from app.monitoring import get_logger
from app.repositories.base import BaseRepository, dialect_insert
from app.schemas.taxonomy import TagCreate, TagUpdate
from app.utils.helpers import utc_now

logger = get_logger(__name__)


class TagRepository(BaseRepository[TagDB, TagCreate, TagUpdate]):
    """
    Repository for Tag database operations.

    Besides plain CRUD it resolves freeform tag names to tag rows,
    creating the missing ones.
    """

    model = TagDB
    label = "Tag"

    async def create(self, schema: TagCreate, **extra: object) -> TagDB:
        if await self._check_exists_by_field("name", schema.name):
            raise DuplicateEntryError(detail="Tag already exists")
        return await super().create(schema, **extra)

    async def update(self, record: TagDB, schema: TagUpdate) -> TagDB:
        if schema.name is not None and await self._check_exists_by_field(
            "name",
            schema.name,
            exclude_id=record.id,
        ):
            raise DuplicateEntryError(detail="Tag already exists")
        return await super().update(record, schema)

    async def get_by_names(self, names: Sequence[str]) -> list[TagDB]:
        if not names:
            return []
        result = await self.session.execute(select(TagDB).where(col(TagDB.name).in_(names)))
        return list(result.scalars().all())

    async def resolve_names(self, names: Sequence[str]) -> list[TagDB]:
        """
        Find-or-create tags by exact name.

        Missing names are inserted with ``ON CONFLICT (name) DO NOTHING``, so
        a concurrent request creating the same name makes our insert a no-op
        instead of an error; the final SELECT then returns whichever row won.

        Args:
            names: Cleaned, de-duplicated tag names

        Returns:
            list[TagDB]: One tag per name, existing and new alike
        """
        if not names:
            return []

        existing = {tag.name for tag in await self.get_by_names(names)}
        missing = [name for name in names if name not in existing]

        if missing:
            now = utc_now()
            statement = (
                dialect_insert(self.session, TagDB)
                .values([{"id": uuid4(), "name": name, "created_at": now} for name in missing])
                .on_conflict_do_nothing(index_elements=["name"])
            )
            await self.session.execute(statement)
            logger.info("Tags created on first use", names=missing)

        return await self.get_by_names(names)
