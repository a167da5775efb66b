"""CLI commands for management tasks."""

import asyncio
import sys

from app.core.database import async_session_maker
from app.core.permissions import Role
from app.core.security import get_password_hash
from app.models.user import User
from app.schemas.validators import validate_email
from app.services.user import get_user_by_email


async def create_superadmin(
    email: str,
    password: str,
    first_name: str,
    last_name: str,
) -> None:
    """Create a platform superadmin (not bound to any tenant)."""
    try:
        email = validate_email(email)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    async with async_session_maker() as db:
        # Check if email is taken
        if await get_user_by_email(db, email):
            print(f"Error: Email {email} is already registered!")
            sys.exit(1)

        superadmin = User(
            email=email,
            password_hash=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            role=Role.SUPERADMIN,
            tenant_id=None,
        )

        db.add(superadmin)
        await db.commit()
        await db.refresh(superadmin)

        print("✓ Superadmin created successfully!")
        print(f"  ID: {superadmin.id}")
        print(f"  Name: {superadmin.full_name}")
        print(f"  Email: {superadmin.email}")


def main() -> None:
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python -m app.cli <command>")
        print("Commands:")
        print("  create-superadmin <email> <password> <first_name> <last_name>")
        sys.exit(1)

    command = sys.argv[1]

    if command == "create-superadmin":
        if len(sys.argv) != 6:
            print(
                "Usage: python -m app.cli create-superadmin "
                "<email> <password> <first_name> <last_name>"
            )
            sys.exit(1)

        _, _, email, password, first_name, last_name = sys.argv
        asyncio.run(create_superadmin(email, password, first_name, last_name))
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
