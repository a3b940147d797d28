"""Utility script to create the first administrator in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from gametracker.application.use_cases.users.create_user import create_user
from gametracker.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial administrator for the game tracker.",
    )
    parser.add_argument("--username", default="admin", help="Login name (default: admin)")
    parser.add_argument("--display-name", default=None, help="Name shown in the UI")
    parser.add_argument("--email", default=None, help="Email used for notifications")
    parser.add_argument(
        "--password",
        default=None,
        help="Password. Prompted for interactively when omitted.",
    )
    parser.add_argument(
        "--no-admin",
        action="store_true",
        help="Create a regular user instead of an administrator.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("No password was provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            username=args.username,
            password=password,
            display_name=args.display_name,
            email=args.email,
            can_manage_users=not args.no_admin,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the user in the database: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Username: {user.username}\n"
            f"  Email: {user.email or '-'}\n"
            f"  Admin: {'yes' if user.can_manage_users else 'no'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
