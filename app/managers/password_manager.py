"""
Password hashing module using Argon2 with passlib's CryptContext.

This module provides password hashing and verification using Argon2id.
Hashing is CPU bound, so the async helpers push it onto a thread pool to
keep the event loop free.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from app.configs import CONFIG_MAP, settings
from app.errors import PasswordHashingError
from app.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="password-hasher")
logger = get_logger(__name__)


class PasswordHasher:
    """
    A password hashing and verification manager using Argon2id.

    This class wraps passlib's CryptContext to provide:
    - Password hashing with Argon2id
    - Password verification
    - Hash deprecation checking for rehash on login

    Args:
        level: Cost preset from ``CONFIG_MAP`` (low, medium, high).
    """

    def __init__(self, level: str | None = None) -> None:
        self.level = level or settings.PASSWORD_SECURITY_LEVEL
        params = CONFIG_MAP[self.level]
        self.pwd_context = CryptContext(
            schemes=["argon2", "pbkdf2_sha256"],
            deprecated="pbkdf2_sha256",
            argon2__memory_cost=params.memory_cost,
            argon2__time_cost=params.time_cost,
            argon2__parallelism=params.parallelism,
        )
        logger.info("PasswordHasher initialized", scheme="argon2id", level=self.level)

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password using Argon2id.

        Args:
            password: The plaintext password to hash

        Returns:
            str: The hashed password in Argon2id format

        Raises:
            ValueError: If password is empty
            PasswordHashingError: If hashing fails
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Verify a plaintext password against a hashed password.

        A corrupted or unknown hash verifies as False rather than raising.
        """
        if not hashed_password or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except ValueError:
            logger.warning("Stored hash is corrupted or in an unknown format")
            return False

    def needs_rehash(self, hashed_password: str) -> bool:
        return self.pwd_context.needs_update(hashed_password)

    def dummy_verify(self) -> None:
        """Spend verification time for unknown users to keep login timing uniform."""
        self.pwd_context.dummy_verify()

    async def hash_password(self, password: str) -> str:
        return await get_running_loop().run_in_executor(executor, self.hash, password)

    async def verify_password(self, password: str, hashed_password: str | None) -> bool:
        """
        Verify off the event loop.

        ``hashed_password`` of None (unknown account) still burns a dummy
        verification so response timing does not reveal which emails exist.
        """
        loop = get_running_loop()
        if hashed_password is None:
            await loop.run_in_executor(executor, self.dummy_verify)
            return False
        return await loop.run_in_executor(executor, self.verify, password, hashed_password)
