"""Tests for the Argon2 password hasher."""

from pytest import fixture, mark, raises

from app.managers import PasswordHasher


@fixture
def hasher() -> PasswordHasher:
    return PasswordHasher("low")


class TestPasswordHasher:
    """Hashing and verification."""

    def test_hash_is_argon2_and_not_plaintext(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("Secret123")
        assert hashed.startswith("$argon2")
        assert "Secret123" not in hashed

    def test_same_password_hashes_differently(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("Secret123") != hasher.hash("Secret123")

    def test_verify(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("Secret123")
        assert hasher.verify("Secret123", hashed) is True
        assert hasher.verify("wrong", hashed) is False

    def test_empty_password_rejected(self, hasher: PasswordHasher) -> None:
        with raises(ValueError, match="empty"):
            hasher.hash("")

    def test_corrupted_hash_verifies_false(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("Secret123", "not-a-hash") is False
        assert hasher.verify("Secret123", "") is False

    def test_stronger_preset_flags_rehash(self, hasher: PasswordHasher) -> None:
        weak = hasher.hash("Secret123")
        assert hasher.needs_rehash(weak) is False
        assert PasswordHasher("medium").needs_rehash(weak) is True

    @mark.asyncio
    async def test_async_helpers(self, hasher: PasswordHasher) -> None:
        hashed = await hasher.hash_password("Secret123")
        assert await hasher.verify_password("Secret123", hashed) is True
        assert await hasher.verify_password("Secret123", None) is False
