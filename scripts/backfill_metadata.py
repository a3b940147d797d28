"""Utility script to fill missing release dates, covers and pricing ids."""

from __future__ import annotations

import argparse
import asyncio

from gametracker.application.use_cases.library import refresh_library_metadata
from gametracker.application.use_cases.users import list_users
from gametracker.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Look every tracked game up in the catalogs again and store newer metadata.",
    )
    parser.add_argument(
        "--username",
        action="append",
        default=None,
        help="Only refresh this user's library (may be repeated). Defaults to every user.",
    )
    return parser.parse_args()


async def backfill(usernames: list[str] | None) -> int:
    """Refresh each library in turn and return the number of failed games."""

    session = SessionLocal()
    try:
        if not usernames:
            usernames = [user.username for user in list_users(session, limit=None)]

        failures = 0
        for username in usernames:
            try:
                report = await refresh_library_metadata(session, username=username)
            except ValueError as exc:
                print(f"{username}: {exc}")
                failures += 1
                continue
            failures += report.errors
            print(
                f"{username}: {report.total} games, {report.updated} updated, "
                f"{report.errors} errors"
            )
        return failures
    finally:
        session.close()


def main() -> None:
    args = parse_args()
    initialize_database()
    failures = asyncio.run(backfill(args.username))
    if failures:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
