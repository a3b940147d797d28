"""Use case refreshing release dates, covers and pricing ids from the catalogs."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from gametracker.domain.entities import MergedResult, TrackedGame
from gametracker.infrastructure.repositories import TrackedGameRepository, UserRepository

from gametracker.application.use_cases.catalog import merge_search

logger = logging.getLogger(__name__)

SearchFunction = Callable[[str], Awaitable[Sequence[MergedResult]]]

DETAIL_UPDATED = "updated"
DETAIL_UNCHANGED = "unchanged"
DETAIL_NOT_FOUND = "not_found"
DETAIL_ERROR = "error"


@dataclass
class MetadataRefreshReport:
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


def metadata_changes(game: TrackedGame, match: MergedResult) -> dict[str, object]:
    """Return the columns of ``game`` that ``match`` has newer values for.

    An existing pricing id is never replaced.
    """

    changes: dict[str, object] = {}
    if match.release_date and match.release_date != game.release_date:
        changes["release_date"] = match.release_date
    if match.cover_url and match.cover_url != game.cover_url:
        changes["cover_url"] = match.cover_url
    if match.external_pricing_id and not game.external_pricing_id:
        changes["external_pricing_id"] = match.external_pricing_id
    return changes


async def refresh_library_metadata(
    session: Session,
    *,
    username: str,
    search: SearchFunction = merge_search,
) -> MetadataRefreshReport:
    """Look every game of ``username`` up again and store newer metadata.

    Each game is matched by exact (case-insensitive) name. Failures are
    reported per game in the returned report.
    """

    report = MetadataRefreshReport()
    user = UserRepository(session).get_by_username(username)
    if user is None:
        raise ValueError("User not found")

    repository = TrackedGameRepository(session)
    for game in repository.list_for_user(user.id):
        report.total += 1
        detail: dict[str, Any] = {"game_id": game.game_id, "name": game.name}
        try:
            results = await search(game.name)
            key = game.name.lower()
            match = next((result for result in results if result.name.lower() == key), None)
            if match is None:
                detail["status"] = DETAIL_NOT_FOUND
            else:
                changes = metadata_changes(game, match)
                if changes:
                    repository.update_metadata(user.id, game.game_id, changes=changes)
                    report.updated += 1
                    detail["status"] = DETAIL_UPDATED
                    detail["changes"] = sorted(changes)
                else:
                    detail["status"] = DETAIL_UNCHANGED
        except Exception as exc:
            session.rollback()
            report.errors += 1
            detail["status"] = DETAIL_ERROR
            detail["error"] = str(exc)
            logger.exception("Metadata refresh for %s/%s failed", user.username, game.game_id)
        report.details.append(detail)

    logger.info(
        "Metadata refresh for %s: %s games, %s updated, %s errors",
        user.username,
        report.total,
        report.updated,
        report.errors,
    )
    return report
