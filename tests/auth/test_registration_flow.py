"""End-to-end tests for registration, login, the credential cookie and /me."""

from collections.abc import Callable
from datetime import timedelta

from httpx import AsyncClient
from pytest import mark

from app.managers import CredentialService
from app.models import Role, UserDB
from tests.conftest import TEST_PASSWORD, UserFactory

HeadersFactory = Callable[[UserDB], dict[str, str]]


def _registration(username: str = "janedoe", **extra: str) -> dict[str, str]:
    return {
        "name": "jane doe",
        "username": username,
        "email": f"{username}@example.com",
        "password": TEST_PASSWORD,
        **extra,
    }


class TestRegistration:
    """Tests for POST /register."""

    @mark.asyncio
    async def test_register_defaults_to_reader(self, client: AsyncClient) -> None:
        response = await client.post("/register", json=_registration())

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["user"]["role"] == "reader"
        assert body["user"]["username"] == "janedoe"
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]
        assert "token" in response.cookies

    @mark.asyncio
    @mark.parametrize(
        ("requested", "stored"),
        [("admin", "reader"), ("superuser", "reader"), ("author", "author"), ("editor", "editor")],
    )
    async def test_requested_role_is_vetted(
        self,
        client: AsyncClient,
        requested: str,
        stored: str,
    ) -> None:
        response = await client.post("/register", json=_registration(role=requested))

        assert response.status_code == 201
        assert response.json()["user"]["role"] == stored

    @mark.asyncio
    async def test_email_is_normalized(self, client: AsyncClient) -> None:
        payload = _registration()
        payload["email"] = "JaneDoe@Example.COM"

        response = await client.post("/register", json=payload)

        assert response.status_code == 201
        assert response.json()["user"]["email"] == "janedoe@example.com"

    @mark.asyncio
    async def test_duplicate_email_conflicts(self, client: AsyncClient) -> None:
        await client.post("/register", json=_registration())
        payload = _registration(username="other")
        payload["email"] = "janedoe@example.com"

        response = await client.post("/register", json=payload)

        assert response.status_code == 409
        assert response.json()["kind"] == "conflict"

    @mark.asyncio
    async def test_duplicate_username_conflicts(self, client: AsyncClient) -> None:
        await client.post("/register", json=_registration())
        payload = _registration()
        payload["email"] = "another@example.com"

        response = await client.post("/register", json=payload)

        assert response.status_code == 409

    @mark.asyncio
    async def test_short_password_rejected(self, client: AsyncClient) -> None:
        response = await client.post("/register", json=_registration(password="123"))

        assert response.status_code == 400
        body = response.json()
        assert body["kind"] == "validation_error"
        assert any(error["field"] == "password" for error in body["errors"])


class TestLogin:
    """Tests for POST /login and POST /logout."""

    @mark.asyncio
    async def test_login_sets_cookie(self, client: AsyncClient, make_user: UserFactory) -> None:
        user = await make_user(Role.AUTHOR)

        response = await client.post(
            "/login",
            json={"email": user.email, "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        cookie = response.headers["set-cookie"].lower()
        assert "httponly" in cookie
        assert "secure" in cookie
        assert "samesite=strict" in cookie
        assert "max-age=3600" in cookie

    @mark.asyncio
    async def test_wrong_password(self, client: AsyncClient, make_user: UserFactory) -> None:
        user = await make_user()

        response = await client.post("/login", json={"email": user.email, "password": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    @mark.asyncio
    async def test_unknown_email_looks_the_same(self, client: AsyncClient) -> None:
        response = await client.post(
            "/login",
            json={"email": "ghost@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    @mark.asyncio
    async def test_logout_clears_cookie(self, client: AsyncClient) -> None:
        await client.post("/register", json=_registration())
        assert (await client.get("/me")).status_code == 200

        response = await client.post("/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logout successful"}
        assert (await client.get("/me")).status_code == 401


class TestCurrentUser:
    """Tests for /me and the credential cookie."""

    @mark.asyncio
    async def test_me_requires_cookie(self, client: AsyncClient) -> None:
        response = await client.get("/me")

        assert response.status_code == 401
        assert response.json() == {"detail": "Unauthorized", "kind": "unauthenticated"}

    @mark.asyncio
    async def test_expired_token_rejected(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        credentials: CredentialService,
    ) -> None:
        user = await make_user()
        token = credentials.issue(user.id, expires_delta=timedelta(seconds=-1))

        response = await client.get("/me", headers={"Cookie": f"token={token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"

    @mark.asyncio
    async def test_me_returns_profile(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        user = await make_user(Role.EDITOR)

        response = await client.get("/me", headers=auth_headers(user))

        assert response.status_code == 200
        body = response.json()["user"]
        assert body["id"] == str(user.id)
        assert body["role"] == "editor"
        assert "createdAt" in body

    @mark.asyncio
    async def test_update_profile(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        user = await make_user()

        response = await client.put(
            "/me",
            json={"name": "new name", "password": "NewSecret1"},
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "new name"
        login = await client.post("/login", json={"email": user.email, "password": "NewSecret1"})
        assert login.status_code == 200

    @mark.asyncio
    async def test_update_to_taken_email_conflicts(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        user = await make_user()
        other = await make_user()

        response = await client.put(
            "/me",
            json={"email": other.email},
            headers=auth_headers(user),
        )

        assert response.status_code == 409

    @mark.asyncio
    async def test_empty_update_rejected(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        user = await make_user()

        response = await client.put("/me", json={}, headers=auth_headers(user))

        assert response.status_code == 400

    @mark.asyncio
    async def test_delete_me_invalidates_token(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        user = await make_user()
        headers = auth_headers(user)

        response = await client.delete("/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["message"] == "User deleted successfully"
        assert (await client.get("/me", headers=headers)).status_code == 401


class TestDeleteUserById:
    """Tests for DELETE /users/{user_id}."""

    @mark.asyncio
    async def test_admin_deletes_user(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        admin = await make_user(Role.ADMIN)
        target = await make_user()

        response = await client.delete(f"/users/{target.id}", headers=auth_headers(admin))

        assert response.status_code == 200
        assert (await client.get("/me", headers=auth_headers(target))).status_code == 401

    @mark.asyncio
    async def test_non_admin_forbidden(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        editor = await make_user(Role.EDITOR)
        target = await make_user()

        response = await client.delete(f"/users/{target.id}", headers=auth_headers(editor))

        assert response.status_code == 403
        assert response.json()["kind"] == "forbidden"

    @mark.asyncio
    async def test_unknown_user(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        admin = await make_user(Role.ADMIN)

        response = await client.delete(
            "/users/00000000-0000-4000-8000-000000000000",
            headers=auth_headers(admin),
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    @mark.asyncio
    async def test_user_deletes_self_by_id(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        reader = await make_user()
        headers = auth_headers(reader)

        response = await client.delete(f"/users/{reader.id}", headers=headers)

        assert response.status_code == 200
        assert (await client.get("/me", headers=headers)).status_code == 401
