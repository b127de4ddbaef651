# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before app is imported anywhere: settings are read once at import
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-entropy-0123456789"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_TO_FILE"] = "false"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402

from httpx import ASGITransport, AsyncClient  # noqa: E402
from pytest import fixture  # noqa: E402

from app.configs import settings  # noqa: E402
from app.db import Database  # noqa: E402
from app.main import app  # noqa: E402
from app.managers import CredentialService, PasswordHasher, limiter  # noqa: E402
from app.models import Role, UserDB  # noqa: E402

TEST_PASSWORD = "Secret123"

UserFactory = Callable[..., Awaitable[UserDB]]


@fixture
async def db() -> AsyncGenerator[Database]:
    """Fresh in-memory database with every table created."""
    database = Database(settings.DATABASE_URL)
    await database.init()
    yield database
    await database.close()


@fixture
def credentials() -> CredentialService:
    return CredentialService.from_settings()


@fixture
def hasher() -> PasswordHasher:
    return PasswordHasher("low")


@fixture
async def client(
    db: Database,
    credentials: CredentialService,
    hasher: PasswordHasher,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client wired to the test database."""
    app.state.db = db
    app.state.credentials = credentials
    app.state.hasher = hasher
    limiter.enabled = False
    async with AsyncClient(
        base_url="https://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac


@fixture
def make_user(db: Database, hasher: PasswordHasher) -> UserFactory:
    """
    Factory inserting a user with the given role straight into the database.

    Bypasses registration, which can never produce an admin.
    """
    counter = 0

    async def _make(role: Role = Role.READER, name: str | None = None) -> UserDB:
        nonlocal counter
        counter += 1
        username = f"{role.value}{counter}"
        user = UserDB(
            name=name or f"{role.value} user",
            username=username,
            email=f"{username}@example.com",
            password_hash=hasher.hash(TEST_PASSWORD),
            role=role.value,
        )
        async with db.transaction() as session:
            session.add(user)
            await session.flush()
            await session.refresh(user)
        return user

    return _make


@fixture
def auth_headers(credentials: CredentialService) -> Callable[[UserDB], dict[str, str]]:
    """Build a Cookie header carrying a valid credential token for a user."""

    def _headers(user: UserDB) -> dict[str, str]:
        return {"Cookie": f"{settings.COOKIE_NAME}={credentials.issue(user.id)}"}

    return _headers
