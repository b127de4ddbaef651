"""User repository for database operations."""

from typing import cast
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.expression import ColumnElement

from app.errors.database import DatabaseError, DuplicateEntryError
from app.models.user import UserDB
from app.repositories.base import BaseRepository
from app.schemas.user import UserCreate, UserUpdate
from app.utils.helpers import utc_now

EMAIL_TAKEN = "User already exists"
USERNAME_TAKEN = "Username already taken"


class UserRepository(BaseRepository[UserDB, UserCreate, UserUpdate]):
    """
    Repository for User database operations.

    Password hashing happens before the repository is called; this layer
    only ever sees the hash.
    """

    model = UserDB
    label = "User"

    async def create_user(
        self,
        user: UserCreate,
        password_hash: str,
        role: str,
    ) -> UserDB:
        """
        Create a new user in the database.

        Args:
            user: Registration data
            password_hash: Already hashed password
            role: Role to store, already vetted by the caller

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If username or email already exists
            DatabaseError: For other database errors
        """
        await self.ensure_available(email=user.email, username=user.username)

        db_user = UserDB(
            name=user.name,
            username=user.username,
            email=user.email,
            password_hash=password_hash,
            role=role,
        )
        return await self._save(db_user)

    async def get_by_username(self, username: str) -> UserDB | None:
        result = await self.session.execute(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.username == username)),
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email.

        Args:
            email: Email to search for, already normalised to lower case

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.email == email)),
        )
        return result.scalar_one_or_none()

    async def ensure_available(
        self,
        *,
        email: str | None = None,
        username: str | None = None,
        exclude_id: UUID | None = None,
    ) -> None:
        """
        Raise DuplicateEntryError if the email or username belongs to another user.

        Args:
            email: Email to check, skipped when None
            username: Username to check, skipped when None
            exclude_id: The user being updated, who may keep their own values
        """
        if email is not None and await self._check_exists_by_field("email", email, exclude_id):
            raise DuplicateEntryError(detail=EMAIL_TAKEN)
        if username is not None and await self._check_exists_by_field(
            "username",
            username,
            exclude_id,
        ):
            raise DuplicateEntryError(detail=USERNAME_TAKEN)

    async def update_profile(
        self,
        user: UserDB,
        changes: UserUpdate,
        password_hash: str | None = None,
    ) -> UserDB:
        """
        Update a user's own profile.

        Args:
            user: The user being updated
            changes: Requested profile changes
            password_hash: New hash when the password changes

        Returns:
            UserDB: Updated user
        """
        await self.ensure_available(
            email=changes.email,
            username=changes.username,
            exclude_id=user.id,
        )

        data = changes.model_dump(exclude_unset=True, exclude={"password"})
        for key, value in data.items():
            if value is not None:
                setattr(user, key, value)
        if password_hash is not None:
            user.password_hash = password_hash
        user.updated_at = utc_now()
        return await self._save(user)

    async def update_password_hash(self, user: UserDB, password_hash: str) -> None:
        user.password_hash = password_hash
        await self._save(user)

    async def _save(self, user: UserDB) -> UserDB:
        # Name the clashing column for races that slipped past ensure_available
        try:
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = (str(e.orig) if e.orig else str(e)).lower()
            if "username" in error_msg:
                raise DuplicateEntryError(detail=USERNAME_TAKEN) from e
            if "email" in error_msg:
                raise DuplicateEntryError(detail=EMAIL_TAKEN) from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        return user
