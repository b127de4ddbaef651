"""Base repository for database operations."""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Generic, TypeAlias, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import DatabaseError, DuplicateEntryError, RecordNotFoundError
from app.monitoring import get_logger

logger = get_logger(__name__)

FilterValue: TypeAlias = str | int | float | bool | UUID | datetime | None

ModelT = TypeVar("ModelT", bound=SQLModel)
CreateSchemaT = TypeVar("CreateSchemaT", bound=BaseModel)
UpdateSchemaT = TypeVar("UpdateSchemaT", bound=BaseModel)


def dialect_insert(session: AsyncSession, model: type[SQLModel]) -> Any:
    """
    Return an INSERT construct supporting ``ON CONFLICT`` for the bound dialect.

    Both PostgreSQL and SQLite implement ``on_conflict_do_nothing`` and
    ``on_conflict_do_update``, which is what lets set-membership writes and
    find-or-create run as single atomic statements.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    mssg = f"Upsert is not supported on dialect '{dialect}'"
    raise DatabaseError(mssg)


class BaseRepository(Generic[ModelT, CreateSchemaT, UpdateSchemaT]):
    """
    Base repository implementing common CRUD operations.

    This class provides a generic implementation of database operations
    that can be extended by specific entity repositories.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
        label: Human readable entity name used in error messages.
    """

    model: type[ModelT]
    id_field: str = "id"
    label: str = "Record"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(self, schema: CreateSchemaT, **extra: Any) -> ModelT:
        """
        Create a new record in the database.

        Args:
            schema: Creation schema with data
            **extra: Column values not carried by the schema

        Returns:
            ModelT: Created database model
        """
        data = schema.model_dump(exclude_unset=True)
        data.update(extra)
        db_obj = self.model.model_validate(data)
        return await self._add_and_refresh(db_obj)

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_many(self, record_ids: Sequence[UUID]) -> list[ModelT]:
        """Fetch every record whose ID is in ``record_ids``; unknown IDs are skipped."""
        if not record_ids:
            return []
        id_column = getattr(self.model, self.id_field)
        result = await self.session.execute(select(self.model).where(id_column.in_(record_ids)))
        return list(result.scalars().all())

    async def get_by_field(self, field_name: str, value: FilterValue) -> ModelT | None:
        field = getattr(self.model, field_name)
        statement = select(self.model).where(field == value)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: UUID) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            raise RecordNotFoundError(detail=f"{self.label} not found")
        return record

    async def get_all(self, skip: int = 0, limit: int | None = None) -> list[ModelT]:
        """
        Get all records with pagination, oldest first.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return, or None for every record

        Returns:
            list[ModelT]: List of records
        """
        statement = select(self.model)
        created_at = getattr(self.model, "created_at", None)
        if created_at is not None:
            statement = statement.order_by(created_at)
        if limit is not None:
            statement = statement.limit(limit)
        result = await self.session.execute(statement.offset(skip))
        return list(result.scalars().all())

    async def update(self, record: ModelT, schema: UpdateSchemaT) -> ModelT:
        """
        Apply the fields explicitly set on ``schema`` to ``record``.

        Args:
            record: Loaded record to update
            schema: Update schema with fields to update

        Returns:
            ModelT: Updated record
        """
        for key, value in schema.model_dump(exclude_unset=True).items():
            setattr(record, key, value)
        return await self._add_and_refresh(record)

    async def delete(self, record_id: UUID) -> bool:
        """
        Delete a record by ID with a single DELETE statement.

        Returns:
            bool: True if record was deleted, False if not found
        """
        id_column = getattr(self.model, self.id_field)
        statement = (
            delete(self.model)
            .where(id_column == record_id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.exception("Delete failed", entity=self.label, record_id=str(record_id))
            raise DatabaseError(detail=f"Failed to delete {self.label.lower()}") from e
        return bool(result.rowcount)

    async def count(self) -> int:
        statement = select(func.count()).select_from(self.model)
        result = await self.session.execute(statement)
        return result.scalar() or 0

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError(
                    detail=f"{self.label} with this value already exists",
                ) from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError(detail=f"Failed to save {self.label.lower()}") from e
        return record

    async def _check_exists_by_field(
        self,
        field_name: str,
        value: FilterValue,
        exclude_id: UUID | None = None,
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(1).where(field == value)

        if exclude_id is not None:
            id_column = getattr(self.model, self.id_field)
            statement = statement.where(id_column != exclude_id)

        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None
