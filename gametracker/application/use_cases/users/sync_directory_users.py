"""Use case refreshing directory-sourced accounts from the directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gametracker.domain.entities import USER_ORIGIN_LDAP
from gametracker.infrastructure.directory import DirectoryClient, DirectoryError
from gametracker.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)

SYNC_UPDATED = "updated"
SYNC_UNCHANGED = "no_changes"
SYNC_NOT_FOUND = "not_found_in_directory"
SYNC_ERROR = "error"


@dataclass
class DirectorySyncReport:
    total: int = 0
    updated: int = 0
    errors: int = 0
    details: list[dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "updated": self.updated,
            "errors": self.errors,
            "details": self.details,
        }


def sync_directory_users(
    session: Session, *, directory: DirectoryClient | None = None
) -> DirectorySyncReport:
    """Copy display name and email from the directory onto every ``ldap`` user.

    The directory value wins for the display name (falling back to the
    username); an email missing in the directory keeps the stored one. Raises
    ``ValueError`` when no directory is configured.
    """

    directory = directory or DirectoryClient()
    if not directory.configured:
        raise ValueError("Directory service is not configured")

    repository = UserRepository(session)
    report = DirectorySyncReport()
    for user in repository.list_by_origin(USER_ORIGIN_LDAP):
        report.total += 1
        detail: dict[str, Any] = {"username": user.username, "changes": []}
        try:
            entry = directory.search_user(user.username)
            if entry is None:
                detail["action"] = SYNC_NOT_FOUND
            else:
                synced = replace(
                    user,
                    display_name=entry.display_name or user.username,
                    email=entry.email or user.email,
                )
                changes = [
                    name
                    for name in ("display_name", "email")
                    if getattr(synced, name) != getattr(user, name)
                ]
                if changes:
                    repository.update(synced)
                    report.updated += 1
                    detail["action"] = SYNC_UPDATED
                    detail["changes"] = changes
                else:
                    detail["action"] = SYNC_UNCHANGED
        except (DirectoryError, SQLAlchemyError) as exc:
            session.rollback()
            report.errors += 1
            detail["action"] = SYNC_ERROR
            detail["error"] = str(exc)
            logger.warning("Directory sync for %s failed: %s", user.username, exc)
        report.details.append(detail)

    logger.info(
        "Directory sync: %s users, %s updated, %s errors",
        report.total,
        report.updated,
        report.errors,
    )
    return report
