"""Use case for adding a title to a library or changing its status."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from sqlalchemy.orm import Session

from gametracker.domain.entities import (
    EVENT_KIND_ADDED,
    EVENT_KIND_STATUS,
    GAME_STATUSES,
    GAME_STATUS_UNRELEASED,
    REMINDER_KIND_RELEASE,
    TrackedGame,
    effective_status,
)
from gametracker.infrastructure.repositories import TrackedGameRepository
from gametracker.utils import today_in_app_timezone

from gametracker.application.use_cases.users import get_or_create_user


@dataclass
class LibraryChange:
    """The saved game and the library events it should be announced with."""

    game: TrackedGame
    events: tuple[str, ...] = field(default_factory=tuple)


def add_or_update_game(
    session: Session,
    *,
    username: str,
    game_id: str,
    name: str,
    status: str,
    release_date: date | None = None,
    cover_url: str | None = None,
    external_pricing_id: str | None = None,
    today: date | None = None,
) -> LibraryChange:
    """Insert or update ``game_id`` in ``username``'s library.

    A title without a release date is always stored as ``unreleased``. Values
    left out on update keep what is stored. Moving a title whose release day
    has passed out of ``unreleased`` is reported as a ``release`` event.
    """

    game_id = str(game_id or "").strip()
    name = (name or "").strip()
    if not game_id or not name:
        raise ValueError("Game id and name are required")
    if status not in GAME_STATUSES:
        raise ValueError(f"Unknown game status '{status}'")

    user = get_or_create_user(session, username)
    repository = TrackedGameRepository(session)
    existing = repository.get(user.id, game_id)

    if existing is not None:
        release_date = release_date or existing.release_date
        cover_url = cover_url or existing.cover_url
        external_pricing_id = external_pricing_id or existing.external_pricing_id

    game = TrackedGame(
        id=existing.id if existing else None,
        user_id=user.id,
        game_id=game_id,
        name=name,
        cover_url=cover_url,
        release_date=release_date,
        status=effective_status(status, release_date),
        external_pricing_id=external_pricing_id,
        last_price=existing.last_price if existing else None,
        last_price_updated=existing.last_price_updated if existing else None,
    )
    saved = repository.upsert(game)

    if existing is None:
        return LibraryChange(game=saved, events=(EVENT_KIND_ADDED,))

    events: list[str] = []
    today = today or today_in_app_timezone()
    if (
        existing.status == GAME_STATUS_UNRELEASED
        and saved.status != GAME_STATUS_UNRELEASED
        and saved.release_date is not None
        and saved.release_date <= today
    ):
        events.append(REMINDER_KIND_RELEASE)
    if existing.status != saved.status:
        events.append(EVENT_KIND_STATUS)
    return LibraryChange(game=saved, events=tuple(events))
