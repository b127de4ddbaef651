#!/usr/bin/env python3
"""
Create Admin User Script.

Registration never grants the admin role, so the first admin is created
directly in the database with this script.

Usage:
    python auto/create_admin.py
    python auto/create_admin.py --email admin@example.com --password Secret123

Interactive Mode (no password given):
    python auto/create_admin.py
    # Script will prompt for each value

Environment Variables:
    ADMIN_EMAIL: Admin email (default: admin@example.com)
    ADMIN_PASSWORD: Admin password (default: prompt or auto-generated)
    ADMIN_USERNAME: Admin username (default: admin)
    ADMIN_NAME: Display name (default: Administrator)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from dataclasses import dataclass
from getpass import getpass
from os import environ
from secrets import token_urlsafe
from sys import exit as sys_exit

from sqlalchemy import or_
from sqlmodel import select

from app.configs import settings
from app.configs.settings import PASSWORD_MIN_LENGTH
from app.db import Database
from app.managers import PasswordHasher
from app.models import Role, UserDB


@dataclass(frozen=True)
class AdminUserData:
    """
    Admin user creation data.

    Attributes
    ----------
    email : str
        Admin email address.
    password : str
        Plain password, hashed before storage.
    username : str
        Admin username.
    name : str
        Display name.
    """

    email: str
    password: str
    username: str
    name: str


def generate_secure_password(length: int = 16) -> str:
    return f"Admin{token_urlsafe(length)[:12]}!1"


def input_with_default(prompt: str, default: str) -> str:
    user_input = input(f"{prompt} [{default}]: ").strip()
    return user_input or default


def input_password() -> str:
    """
    Ask for a password or generate one.

    Returns
    -------
    str
        Password entered by the user, or a generated one.
    """
    print("\nPassword options:")
    print("  1. Enter your own password")
    print("  2. Auto-generate a secure password")
    choice = input("Select option [2]: ").strip() or "2"

    if choice != "1":
        password = generate_secure_password()
        print(f"\n✅ Auto-generated password: {password}")
        print("⚠️  Please save this password now! You won't see it again.")
        return password

    while True:
        password = getpass("Enter password: ")
        if len(password) < PASSWORD_MIN_LENGTH:
            print(f"❌ Password must be at least {PASSWORD_MIN_LENGTH} characters.")
            continue
        if password != getpass("Confirm password: "):
            print("❌ Passwords do not match.")
            continue
        return password


def interactive_input() -> AdminUserData:
    print("=" * 60)
    print("Create Admin User - Interactive Mode")
    print("=" * 60)
    print("Press Enter to accept default values shown in [brackets]\n")

    return AdminUserData(
        email=input_with_default("Email", environ.get("ADMIN_EMAIL", "admin@example.com")),
        username=input_with_default("Username", environ.get("ADMIN_USERNAME", "admin")),
        name=input_with_default("Name", environ.get("ADMIN_NAME", "Administrator")),
        password=input_password(),
    )


def get_admin_data_from_args(args: Namespace) -> AdminUserData | None:
    """
    Build AdminUserData from arguments, falling back to environment variables.

    Returns None when no password is available, which triggers the prompts.
    """
    password = args.password or environ.get("ADMIN_PASSWORD")
    if password is None:
        if args.email is None:
            return None
        password = generate_secure_password()
        print(f"✅ Auto-generated password: {password}")

    return AdminUserData(
        email=args.email or environ.get("ADMIN_EMAIL", "admin@example.com"),
        password=password,
        username=args.username or environ.get("ADMIN_USERNAME", "admin"),
        name=args.name or environ.get("ADMIN_NAME", "Administrator"),
    )


async def create_admin_user(admin_data: AdminUserData, db: Database) -> UserDB:
    """
    Create an admin user in the database.

    Parameters
    ----------
    admin_data : AdminUserData
        Admin user data container.
    db : Database
        Persistence handle to write through.

    Returns
    -------
    UserDB
        Created admin user.

    Raises
    ------
    ValueError
        If a user with the email or username already exists.
    """
    async with db.transaction() as session:
        existing = await session.execute(
            select(UserDB).where(
                or_(UserDB.email == admin_data.email, UserDB.username == admin_data.username),
            ),
        )
        if existing.scalars().first():
            msg = (
                f"User with email '{admin_data.email}' or username "
                f"'{admin_data.username}' already exists"
            )
            raise ValueError(msg)

        admin_user = UserDB(
            name=admin_data.name,
            username=admin_data.username,
            email=admin_data.email,
            password_hash=await PasswordHasher().hash_password(admin_data.password),
            role=Role.ADMIN,
        )
        session.add(admin_user)
        await session.flush()
        await session.refresh(admin_user)
        return admin_user


def parse_args() -> Namespace:
    parser = ArgumentParser(
        description="Create an admin user in the database.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode (prompts for values)
  python auto/create_admin.py --interactive

  # Command-line arguments
  python auto/create_admin.py -e admin@mysite.com -p MySecurePass123 -u boss -n "Big Boss"
        """,
    )
    parser.add_argument("-e", "--email", default=None, help="Admin email (or ADMIN_EMAIL)")
    parser.add_argument(
        "-p",
        "--password",
        default=None,
        help="Admin password (or ADMIN_PASSWORD; generated when --email is given alone)",
    )
    parser.add_argument("-u", "--username", default=None, help="Admin username (or ADMIN_USERNAME)")
    parser.add_argument("-n", "--name", default=None, help="Display name (or ADMIN_NAME)")
    parser.add_argument(
        "--interactive",
        "-i",
        action="store_true",
        help="Force interactive mode even if arguments are provided",
    )
    return parser.parse_args()


async def main() -> int:
    args = parse_args()

    admin_data = None if args.interactive else get_admin_data_from_args(args)
    if admin_data is None:
        try:
            admin_data = interactive_input()
        except (KeyboardInterrupt, EOFError):
            print("\n\n❌ Cancelled by user.")
            return 1

    db = Database(settings.DATABASE_URL)
    try:
        admin = await create_admin_user(admin_data, db)
    except ValueError as e:
        print(f"\n❌ Error: {e}")
        return 1
    finally:
        await db.close()

    print("\n✅ Admin user created successfully!")
    print(f"   ID:       {admin.id}")
    print(f"   Email:    {admin.email}")
    print(f"   Username: {admin.username}")
    print(f"   Role:     {admin.role}")
    return 0


if __name__ == "__main__":
    sys_exit(asyncio_run(main()))
