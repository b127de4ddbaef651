"""Category repository for database operations."""

from app.errors.database import DuplicateEntryError
from app.models.category import CategoryDB
from app.repositories.base import BaseRepository
from app.schemas.taxonomy import CategoryCreate, CategoryUpdate


class CategoryRepository(BaseRepository[CategoryDB, CategoryCreate, CategoryUpdate]):
    model = CategoryDB
    label = "Category"

    async def create(self, schema: CategoryCreate, **extra: object) -> CategoryDB:
        if await self._check_exists_by_field("name", schema.name):
            raise DuplicateEntryError(detail="Category already exists")
        return await super().create(schema, **extra)

    async def update(self, record: CategoryDB, schema: CategoryUpdate) -> CategoryDB:
        if schema.name is not None and await self._check_exists_by_field(
            "name",
            schema.name,
            exclude_id=record.id,
        ):
            raise DuplicateEntryError(detail="Category already exists")
        return await super().update(record, schema)

    async def get_by_name(self, name: str) -> CategoryDB | None:
        return await self.get_by_field("name", name.strip())
