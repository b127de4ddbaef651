"""Tests for category and tag CRUD."""

from collections.abc import Callable
from uuid import uuid4

from httpx import AsyncClient
from pytest import mark

from app.db import Database
from app.models import Role, UserDB
from app.repositories import TagRepository
from tests.conftest import UserFactory
from tests.routes.conftest import BlogFactory

HeadersFactory = Callable[[UserDB], dict[str, str]]


@mark.parametrize(("prefix", "key"), [("/category", "category"), ("/tag", "tag")])
class TestTaxonomyCrud:
    """Categories and tags share one shape and one set of rules."""

    @mark.asyncio
    async def test_create_and_get(self, client: AsyncClient, prefix: str, key: str) -> None:
        created = await client.post(prefix, json={"name": "  python ", "description": "Snakes"})

        assert created.status_code == 201
        item = created.json()[key]
        assert item["name"] == "python"
        assert item["description"] == "Snakes"
        assert "createdAt" in item

        fetched = await client.get(f"{prefix}/{item['id']}")
        assert fetched.status_code == 200
        assert fetched.json()[key]["id"] == item["id"]

    @mark.asyncio
    async def test_duplicate_name_conflicts(
        self,
        client: AsyncClient,
        prefix: str,
        key: str,
    ) -> None:
        await client.post(prefix, json={"name": "python"})

        response = await client.post(prefix, json={"name": "python"})

        assert response.status_code == 409
        assert response.json()["kind"] == "conflict"

    @mark.asyncio
    @mark.parametrize("name", ["a", "x" * 51, "   "])
    async def test_name_length_enforced(
        self,
        client: AsyncClient,
        prefix: str,
        key: str,
        name: str,
    ) -> None:
        response = await client.post(prefix, json={"name": name})

        assert response.status_code == 400

    @mark.asyncio
    async def test_list(self, client: AsyncClient, prefix: str, key: str) -> None:
        for name in ("python", "rust"):
            await client.post(prefix, json={"name": name})

        response = await client.get(prefix)

        assert response.status_code == 200
        items = next(iter(response.json().values()))
        assert sorted(item["name"] for item in items) == ["python", "rust"]

    @mark.asyncio
    async def test_update(self, client: AsyncClient, prefix: str, key: str) -> None:
        item = (await client.post(prefix, json={"name": "python"})).json()[key]

        response = await client.put(f"{prefix}/{item['id']}", json={"description": "updated"})

        assert response.status_code == 200
        assert response.json()[key]["description"] == "updated"
        assert response.json()[key]["name"] == "python"

    @mark.asyncio
    async def test_rename_to_taken_name_conflicts(
        self,
        client: AsyncClient,
        prefix: str,
        key: str,
    ) -> None:
        await client.post(prefix, json={"name": "python"})
        rust = (await client.post(prefix, json={"name": "rust"})).json()[key]

        response = await client.put(f"{prefix}/{rust['id']}", json={"name": "python"})

        assert response.status_code == 409

    @mark.asyncio
    async def test_missing(self, client: AsyncClient, prefix: str, key: str) -> None:
        missing = uuid4()

        assert (await client.get(f"{prefix}/{missing}")).status_code == 404
        assert (await client.put(f"{prefix}/{missing}", json={"name": "xyz"})).status_code == 404
        assert (await client.delete(f"{prefix}/{missing}")).status_code == 404

    @mark.asyncio
    async def test_delete(self, client: AsyncClient, prefix: str, key: str) -> None:
        item = (await client.post(prefix, json={"name": "python"})).json()[key]

        response = await client.delete(f"{prefix}/{item['id']}")

        assert response.status_code == 200
        assert "deleted successfully" in response.json()["message"]
        assert (await client.get(f"{prefix}/{item['id']}")).status_code == 404


class TestTaxonomyDeletionEffects:
    """Deleting taxonomy detaches it from blogs without deleting them."""

    @mark.asyncio
    async def test_deleting_category_uncategorises_blogs(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
        create_blog: BlogFactory,
    ) -> None:
        author = await make_user(Role.AUTHOR)
        category = (await client.post("/category", json={"name": "python"})).json()["category"]
        blog = await create_blog(author, category=category["id"])

        await client.delete(f"/category/{category['id']}")

        fetched = await client.get(f"/blog/{blog['id']}", headers=auth_headers(author))
        assert fetched.status_code == 200
        assert fetched.json()["blog"]["category"] is None

    @mark.asyncio
    async def test_deleting_tag_removes_it_from_blogs(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
        create_blog: BlogFactory,
    ) -> None:
        author = await make_user(Role.AUTHOR)
        blog = await create_blog(author, tagNames=["python", "rust"])
        rust = next(tag for tag in blog["tags"] if tag["name"] == "rust")

        await client.delete(f"/tag/{rust['id']}")

        fetched = await client.get(f"/blog/{blog['id']}", headers=auth_headers(author))
        assert [tag["name"] for tag in fetched.json()["blog"]["tags"]] == ["python"]


class TestTagListing:
    """GET /tag returns every tag."""

    @mark.asyncio
    async def test_lists_more_than_one_page_of_rows(
        self,
        client: AsyncClient,
        db: Database,
    ) -> None:
        async with db.transaction() as session:
            await TagRepository(session).resolve_names([f"tag{i:03d}" for i in range(150)])

        response = await client.get("/tag")

        assert response.status_code == 200
        assert len(response.json()["tags"]) == 150
