"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.configs import settings
from app.monitoring import get_logger

logger = get_logger(__name__)

STATEMENT_TIMEOUT_MS = 30000


def engine_kwargs(url: str) -> dict[str, Any]:
    """
    Engine options for the given database URL.

    SQLite (used in tests and local runs) shares one connection so an
    in-memory database survives across sessions; PostgreSQL gets a sized
    pool and server side statement timeouts.
    """
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }

    kwargs: dict[str, Any] = {
        "pool_size": settings.POOL_SIZE,
        "max_overflow": settings.MAX_OVERFLOW,
        "pool_timeout": settings.POOL_TIMEOUT,
        "pool_recycle": settings.POOL_RECYCLE,
        "pool_pre_ping": True,
    }
    if "asyncpg" in url:
        kwargs["connect_args"] = {
            "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
            "server_settings": {
                "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                "lock_timeout": str(STATEMENT_TIMEOUT_MS),
            },
        }
    return kwargs


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection events for SQLite foreign keys and debug tracing."""

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def enable_foreign_keys(dbapi_connection: Any, connection_record: object) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    if settings.DEBUG:

        @event.listens_for(engine.sync_engine, "checkout")
        def on_checkout(
            dbapi_connection: object,
            connection_record: object,
            connection_proxy: object,
        ) -> None:
            logger.debug("Connection checked out from pool")

        @event.listens_for(engine.sync_engine, "checkin")
        def on_checkin(dbapi_connection: object, connection_record: object) -> None:
            logger.debug("Connection returned to pool")


class Database:
    """
    Persistence handle owning the async engine and session factory.

    One instance is built in the application lifespan, stored on
    ``app.state.db`` and handed to request handlers through ``get_session``.

    Args:
        url: SQLAlchemy async database URL.
        echo: Whether to log emitted SQL.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs(url))
        _configure_engine_events(self.engine)
        self.session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
            self.engine,
            class_=SQLModelAsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    async def init(self) -> None:
        """
        Create all tables defined in SQLModel models.

        Note:
            This is a convenience for development and tests.
            For production, run the Alembic migrations instead.
        """
        # Registers every table on SQLModel.metadata
        import app.models  # noqa: F401, PLC0415

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized", dialect=self.dialect)

    async def drop(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    async def close(self) -> None:
        """Dispose the engine and every pooled connection."""
        await self.engine.dispose()
        logger.info("Database connections closed")

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession]:
        """
        Context manager for explicit transaction management.

        Yields:
            AsyncSession: Database session within a transaction

        Example:
            ```python
            async with db.transaction() as session:
                session.add(UserDB(username="test", ...))
                # Commits on successful exit, rolls back on exception
            ```
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                logger.warning("Transaction rolled back")
                raise


def get_database(request: Request) -> Database:
    """Return the persistence handle built by the application lifespan."""
    return request.app.state.db


async def get_session(
    db: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    The whole request runs in one transaction: it commits when the handler
    returns and rolls back when it raises.

    Yields:
        AsyncSession: Database session
    """
    async with db.transaction() as session:
        yield session
