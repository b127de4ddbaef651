"""Tests for the application entrypoint: health, middleware and lifespan."""

from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from pytest import mark

from app.db import Database
from app.main import app
from app.managers import CredentialService, PasswordHasher


@mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Health check needs no authentication."""
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["message"] == "Server is healthy"
    assert data["version"] == app.version
    assert "timestamp" in data


@mark.asyncio
async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


@mark.asyncio
async def test_request_id_echoed(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"


@mark.asyncio
async def test_request_id_generated(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.headers["X-Request-ID"]


@mark.asyncio
async def test_unknown_route(client: AsyncClient) -> None:
    assert (await client.get("/does-not-exist")).status_code == 404


@mark.asyncio
async def test_lifespan_builds_services() -> None:
    """Startup builds the persistence handle, credential service and hasher."""
    async with (
        LifespanManager(app) as manager,
        AsyncClient(
            transport=ASGITransport(app=manager.app),
            base_url="https://test",
        ) as ac,
    ):
        assert isinstance(app.state.db, Database)
        assert isinstance(app.state.credentials, CredentialService)
        assert isinstance(app.state.hasher, PasswordHasher)
        response = await ac.post(
            "/register",
            json={
                "name": "life cycle",
                "username": "lifecycle",
                "email": "lifecycle@example.com",
                "password": "Secret123",
            },
        )
        assert response.status_code == 201
