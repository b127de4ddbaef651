"""Tests for comment routes and comment ownership."""

from collections.abc import Callable
from uuid import uuid4

from httpx import AsyncClient
from pytest import mark

from app.models import Role, UserDB
from tests.conftest import UserFactory
from tests.routes.conftest import BlogFactory

HeadersFactory = Callable[[UserDB], dict[str, str]]


class TestAddComment:
    """Tests for POST /blog/{blog_id}/comment."""

    @mark.asyncio
    async def test_any_role_may_comment(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(await make_user(Role.AUTHOR))
        reader = await make_user(Role.READER, name="rita reader")

        response = await client.post(
            f"/blog/{blog['id']}/comment",
            json={"comment": "  Great post!  "},
            headers=auth_headers(reader),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Comment added successfully"
        comment = body["comment"]
        assert comment["comment"] == "Great post!"
        assert comment["user"] == {"id": str(reader.id), "name": "rita reader"}
        assert comment["blogId"] == blog["id"]

        fetched = await client.get(f"/blog/{blog['id']}", headers=auth_headers(reader))
        assert fetched.json()["blog"]["comments"] == [comment["id"]]

    @mark.asyncio
    async def test_blank_comment_rejected(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(await make_user(Role.AUTHOR))
        reader = await make_user()

        response = await client.post(
            f"/blog/{blog['id']}/comment",
            json={"comment": "   "},
            headers=auth_headers(reader),
        )

        assert response.status_code == 400

    @mark.asyncio
    async def test_missing_blog(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        reader = await make_user()

        response = await client.post(
            f"/blog/{uuid4()}/comment",
            json={"comment": "hello"},
            headers=auth_headers(reader),
        )

        assert response.status_code == 404

    @mark.asyncio
    async def test_requires_authentication(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(await make_user(Role.AUTHOR))

        response = await client.post(f"/blog/{blog['id']}/comment", json={"comment": "hi"})

        assert response.status_code == 401


class TestListComments:
    """Tests for GET /blog/{blog_id}/comments."""

    @mark.asyncio
    async def test_lists_oldest_first_without_authentication(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(await make_user(Role.AUTHOR))
        reader = await make_user()
        for text in ("first", "second", "third"):
            await client.post(
                f"/blog/{blog['id']}/comment",
                json={"comment": text},
                headers=auth_headers(reader),
            )

        response = await client.get(f"/blog/{blog['id']}/comments")

        assert response.status_code == 200
        assert [c["comment"] for c in response.json()["comments"]] == ["first", "second", "third"]


class TestCommentOwnership:
    """Only the comment's author or an admin may edit or delete it."""

    @mark.asyncio
    async def test_owner_edits_comment(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(await make_user(Role.AUTHOR))
        reader = await make_user()
        comment = (
            await client.post(
                f"/blog/{blog['id']}/comment",
                json={"comment": "tpyo"},
                headers=auth_headers(reader),
            )
        ).json()["comment"]

        response = await client.put(
            f"/comment/{comment['id']}",
            json={"comment": "typo"},
            headers=auth_headers(reader),
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Comment updated successfully"
        assert response.json()["comment"]["comment"] == "typo"
        assert response.json()["comment"]["updatedAt"] is not None

    @mark.asyncio
    async def test_other_user_cannot_edit_or_delete(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
        create_blog: BlogFactory,
    ) -> None:
        author = await make_user(Role.AUTHOR)
        blog = await create_blog(author)
        commenter = await make_user()
        comment = (
            await client.post(
                f"/blog/{blog['id']}/comment",
                json={"comment": "mine"},
                headers=auth_headers(commenter),
            )
        ).json()["comment"]

        edited = await client.put(
            f"/comment/{comment['id']}",
            json={"comment": "yours now"},
            headers=auth_headers(author),
        )
        deleted = await client.delete(f"/comment/{comment['id']}", headers=auth_headers(author))

        assert edited.status_code == 403
        assert deleted.status_code == 403
        remaining = (await client.get(f"/blog/{blog['id']}/comments")).json()["comments"]
        assert [c["comment"] for c in remaining] == ["mine"]

    @mark.asyncio
    async def test_admin_edits_and_deletes_any_comment(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(await make_user(Role.AUTHOR))
        commenter = await make_user(name="carl commenter")
        admin = await make_user(Role.ADMIN)
        comment = (
            await client.post(
                f"/blog/{blog['id']}/comment",
                json={"comment": "spam"},
                headers=auth_headers(commenter),
            )
        ).json()["comment"]

        edited = await client.put(
            f"/comment/{comment['id']}",
            json={"comment": "[removed]"},
            headers=auth_headers(admin),
        )
        deleted = await client.delete(f"/comment/{comment['id']}", headers=auth_headers(admin))

        assert edited.status_code == 200
        assert edited.json()["comment"]["user"]["name"] == "carl commenter"
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Comment deleted successfully"}

    @mark.asyncio
    async def test_deleted_comment_leaves_blog(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(await make_user(Role.AUTHOR))
        reader = await make_user()
        headers = auth_headers(reader)
        keep = (
            await client.post(
                f"/blog/{blog['id']}/comment",
                json={"comment": "keep"},
                headers=headers,
            )
        ).json()["comment"]
        drop = (
            await client.post(
                f"/blog/{blog['id']}/comment",
                json={"comment": "drop"},
                headers=headers,
            )
        ).json()["comment"]

        await client.delete(f"/comment/{drop['id']}", headers=headers)

        fetched = (await client.get(f"/blog/{blog['id']}", headers=headers)).json()["blog"]
        assert fetched["comments"] == [keep["id"]]
        again = await client.delete(f"/comment/{drop['id']}", headers=headers)
        assert again.status_code == 404
        assert again.json()["detail"] == "Comment not found"
