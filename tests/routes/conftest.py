# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import Awaitable, Callable
from typing import Any

from httpx import AsyncClient
from pytest import fixture

from app.models import UserDB

BlogFactory = Callable[..., Awaitable[dict[str, Any]]]


@fixture
def create_blog(
    client: AsyncClient,
    auth_headers: Callable[[UserDB], dict[str, str]],
) -> BlogFactory:
    """Create a blog through the API as ``author`` and return its JSON."""

    async def _create(author: UserDB, **payload: Any) -> dict[str, Any]:
        body = {"title": "Async Python", "content": "Coroutines are neat", **payload}
        response = await client.post("/createblog", json=body, headers=auth_headers(author))
        assert response.status_code == 201, response.text
        return response.json()["blog"]

    return _create
