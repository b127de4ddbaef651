"""Authentication service handling registration, login and self-service profiles."""

from uuid import UUID

from app.errors.auth import InvalidCredentialsError
from app.errors.database import RecordNotFoundError
from app.managers.password_manager import PasswordHasher
from app.managers.token_manager import CredentialService
from app.models import Role, UserDB
from app.monitoring import get_logger
from app.repositories import UserRepository
from app.schemas.user import UserCreate, UserUpdate

logger = get_logger(__name__)


def registrable_role(requested: str | None) -> Role:
    """
    Role stored for a self-registration request.

    Admin can never be self-granted and unknown values are not errors;
    both fall back to reader.
    """
    if requested is None:
        return Role.READER
    try:
        role = Role(requested.strip().lower())
    except ValueError:
        return Role.READER
    return Role.READER if role is Role.ADMIN else role


class AuthService:
    """Service for handling user authentication and account lifecycle."""

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        credentials: CredentialService,
    ) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
            hasher: Password hasher built in the application lifespan
            credentials: Token issuer built in the application lifespan
        """
        self.user_repo = user_repo
        self.hasher = hasher
        self.credentials = credentials

    async def register(self, user: UserCreate) -> UserDB:
        """
        Create an account from a registration request.

        The requested role is vetted first: admin and unknown roles are
        stored as reader.

        Raises:
            DuplicateEntryError: If the email or username is taken
        """
        role = registrable_role(user.role)
        if user.role is not None and role.value != user.role.strip().lower():
            logger.info("Requested role downgraded on registration", requested=user.role)

        await self.user_repo.ensure_available(email=user.email, username=user.username)
        password_hash = await self.hasher.hash_password(user.password.get_secret_value())
        db_user = await self.user_repo.create_user(user, password_hash, role.value)
        logger.info("User registered", user_id=str(db_user.id), role=db_user.role)
        return db_user

    async def authenticate(self, email: str, password: str) -> UserDB:
        """
        Authenticate a user by email and password.

        Args:
            email: Login email, already lower case
            password: Plaintext password

        Returns:
            UserDB: Authenticated user

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = await self.user_repo.get_by_email(email)
        stored_hash = user.password_hash if user else None
        if not await self.hasher.verify_password(password, stored_hash) or user is None:
            logger.info("Login failed", reason="invalid_credentials")
            raise InvalidCredentialsError

        if self.hasher.needs_rehash(user.password_hash):
            new_hash = await self.hasher.hash_password(password)
            await self.user_repo.update_password_hash(user, new_hash)
            logger.info("Password hash upgraded", user_id=str(user.id))

        return user

    def issue_token(self, user: UserDB) -> str:
        return self.credentials.issue(user.id)

    async def update_profile(self, user: UserDB, changes: UserUpdate) -> UserDB:
        password_hash = None
        if changes.password is not None:
            password_hash = await self.hasher.hash_password(changes.password.get_secret_value())
        return await self.user_repo.update_profile(user, changes, password_hash)

    async def delete_user(self, user_id: UUID) -> None:
        """
        Delete a user account.

        Their comments and reactions go with them; blogs they wrote stay
        and lose their author.

        Raises:
            RecordNotFoundError: If no such user exists
        """
        if not await self.user_repo.delete(user_id):
            raise RecordNotFoundError(detail="User not found")
        logger.info("User deleted", user_id=str(user_id))
