"""Tests for tag find-or-create by name."""

from collections.abc import Sequence

from pytest import MonkeyPatch, mark

from app.db import Database
from app.models import TagDB
from app.repositories import TagRepository
from app.schemas import TagCreate


class TestResolveNames:
    """Resolving names never creates a duplicate tag."""

    @mark.asyncio
    async def test_creates_missing_names(self, db: Database) -> None:
        async with db.transaction() as session:
            tags = await TagRepository(session).resolve_names(["python", "rust"])

        assert sorted(tag.name for tag in tags) == ["python", "rust"]

    @mark.asyncio
    async def test_is_idempotent(self, db: Database) -> None:
        async with db.transaction() as session:
            first = await TagRepository(session).resolve_names(["python"])
        async with db.transaction() as session:
            repo = TagRepository(session)
            second = await repo.resolve_names(["python", "web"])
            total = await repo.count()

        assert first[0].id in {tag.id for tag in second}
        assert total == 2

    @mark.asyncio
    async def test_reuses_tags_created_explicitly(self, db: Database) -> None:
        async with db.transaction() as session:
            created = await TagRepository(session).create(TagCreate(name="python"))
        async with db.transaction() as session:
            resolved = await TagRepository(session).resolve_names(["python"])

        assert [tag.id for tag in resolved] == [created.id]

    @mark.asyncio
    async def test_name_created_concurrently_is_reused(
        self,
        db: Database,
        monkeypatch: MonkeyPatch,
    ) -> None:
        """A row inserted between lookup and insert is re-fetched, not duplicated."""
        async with db.transaction() as session:
            winner = await TagRepository(session).create(TagCreate(name="python"))

        async with db.transaction() as session:
            repo = TagRepository(session)
            lookup = repo.get_by_names
            calls = 0

            async def stale_lookup(names: Sequence[str]) -> list[TagDB]:
                nonlocal calls
                calls += 1
                return [] if calls == 1 else await lookup(names)

            monkeypatch.setattr(repo, "get_by_names", stale_lookup)

            resolved = await repo.resolve_names(["python"])
            total = await repo.count()

        assert calls == 2
        assert [tag.id for tag in resolved] == [winner.id]
        assert total == 1

    @mark.asyncio
    async def test_empty_input(self, db: Database) -> None:
        async with db.transaction() as session:
            assert await TagRepository(session).resolve_names([]) == []


class TestGetAll:
    """Listing is unbounded unless a limit is given."""

    @mark.asyncio
    async def test_returns_every_row_by_default(self, db: Database) -> None:
        names = [f"tag{i:03d}" for i in range(150)]
        async with db.transaction() as session:
            await TagRepository(session).resolve_names(names)
        async with db.transaction() as session:
            repo = TagRepository(session)
            everything = await repo.get_all()
            page = await repo.get_all(skip=10, limit=5)

        assert len(everything) == 150
        assert len(page) == 5
