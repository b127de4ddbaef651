"""Malformed identifiers are rejected as validation errors before any lookup."""

from collections.abc import Callable

from httpx import AsyncClient
from pytest import mark

from app.models import Role, UserDB
from tests.conftest import UserFactory

HeadersFactory = Callable[[UserDB], dict[str, str]]

BAD_ID = "not-a-uuid"


class TestMalformedIds:
    """Tests for path identifiers that are not UUIDs."""

    @mark.asyncio
    @mark.parametrize(
        ("method", "path"),
        [
            ("GET", f"/blog/{BAD_ID}"),
            ("DELETE", f"/blog/{BAD_ID}"),
            ("POST", f"/blog/{BAD_ID}/like"),
            ("PUT", f"/blog/{BAD_ID}/publish"),
            ("DELETE", f"/comment/{BAD_ID}"),
            ("DELETE", f"/users/{BAD_ID}"),
        ],
    )
    async def test_authenticated_routes(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
        method: str,
        path: str,
    ) -> None:
        admin = await make_user(Role.ADMIN)

        response = await client.request(method, path, headers=auth_headers(admin))

        assert response.status_code == 400
        body = response.json()
        assert body["kind"] == "validation_error"
        assert body["errors"][0]["field"].endswith("_id")

    @mark.asyncio
    @mark.parametrize(
        "path",
        [f"/category/{BAD_ID}", f"/tag/{BAD_ID}", f"/blog/{BAD_ID}/comments"],
    )
    async def test_open_routes(self, client: AsyncClient, path: str) -> None:
        response = await client.get(path)

        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"
