#!/usr/bin/env python3
"""
CLI script to create the initial super admin user.

Usage (interactive):
    python scripts/create_super_admin.py

Usage (non-interactive):
    python scripts/create_super_admin.py --email admin@example.com --password yourpassword --name Jane --surname Doe
"""

import argparse
import asyncio
import sys
from getpass import getpass
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import func, select

from app.database import async_session_factory, engine
from app.models import User
from app.models.user import Role
from app.utils.security import hash_password

MIN_PASSWORD_LENGTH = 8


def _valid_email(email: str) -> bool:
    return "@" in email and "." in email.split("@")[-1]


async def create_super_admin(
    email: str | None = None,
    password: str | None = None,
    name: str | None = None,
    surname: str | None = None,
    interactive: bool = True,
    force: bool = False,
) -> bool:
    """Create a super admin user. Returns True on success."""
    print("\n" + "=" * 50)
    print("EduTrack - Super Admin Setup")
    print("=" * 50 + "\n")

    # Get email
    if not email:
        while True:
            email = input("Enter email address: ").strip().lower()
            if _valid_email(email):
                break
            print("Please enter a valid email address.")
    else:
        email = email.strip().lower()
        if not _valid_email(email):
            print("Invalid email address.")
            return False

    # Get password
    if not password:
        while True:
            password = getpass(f"Enter password (min {MIN_PASSWORD_LENGTH} characters): ")
            if len(password) >= MIN_PASSWORD_LENGTH:
                break
            print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

        if password != getpass("Confirm password: "):
            print("\nPasswords do not match. Aborting.")
            return False
    elif len(password) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        return False

    if not name:
        name = input("Enter first name: ").strip() or "Super"
    if not surname:
        surname = input("Enter surname: ").strip() or "Admin"

    async with async_session_factory() as session:
        result = await session.execute(
            select(User).where(User.role == Role.SUPER_ADMIN.value).limit(1)
        )
        existing = result.scalar_one_or_none()

        if existing and not force:
            print(f"\nA super admin already exists: {existing.email}")
            if not interactive:
                print("Use --force to create another super admin.")
                return False
            if input("Create another super admin? (y/n): ").strip().lower() != "y":
                print("Aborting.")
                return False

        result = await session.execute(select(User).where(func.lower(User.email) == email))
        if result.scalar_one_or_none():
            print(f"\nUser with email {email} already exists.")
            return False

        user = User(
            email=email,
            password_hash=hash_password(password),
            name=name,
            surname=surname,
            role=Role.SUPER_ADMIN.value,
            school_id=None,  # Super admins don't belong to a school
            is_active=True,
        )

        session.add(user)
        await session.commit()
        await session.refresh(user)

        print("\n" + "=" * 50)
        print("Super Admin Created Successfully!")
        print("=" * 50)
        print(f"  Email: {user.email}")
        print(f"  Name: {user.full_name}")
        print(f"  ID: {user.id}")
        print("=" * 50 + "\n")

        return True


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Create an EduTrack super admin user")
    parser.add_argument("--email", "-e", help="Admin email address")
    parser.add_argument("--password", "-p", help=f"Admin password (min {MIN_PASSWORD_LENGTH} chars)")
    parser.add_argument("--name", "-n", help="First name", default="Super")
    parser.add_argument("--surname", "-s", help="Surname", default="Admin")
    parser.add_argument("--force", action="store_true", help="Create even if a super admin exists")

    args = parser.parse_args()

    # Determine if running interactively
    interactive = not (args.email and args.password)

    try:
        success = await create_super_admin(
            email=args.email,
            password=args.password,
            name=args.name,
            surname=args.surname,
            interactive=interactive,
            force=args.force,
        )
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\nAborted by user.")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
