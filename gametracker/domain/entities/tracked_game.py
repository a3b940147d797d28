"""Domain entity representing a game tracked in a user's library."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

GAME_STATUS_WISHLIST = "wishlist"
GAME_STATUS_PLAYING = "playing"
GAME_STATUS_DONE = "done"
GAME_STATUS_UNRELEASED = "unreleased"

GAME_STATUSES: tuple[str, ...] = (
    GAME_STATUS_WISHLIST,
    GAME_STATUS_PLAYING,
    GAME_STATUS_DONE,
    GAME_STATUS_UNRELEASED,
)


def effective_status(status: str, release_date: date | None) -> str:
    """Return the status a game may actually be stored with.

    A game without a known release date can only be ``unreleased``.
    """

    if release_date is None:
        return GAME_STATUS_UNRELEASED
    if status not in GAME_STATUSES:
        raise ValueError(f"Unknown game status '{status}'")
    return status


@dataclass
class TrackedGame:
    """A catalog title added to a user's personal list."""

    id: int | None
    user_id: int
    game_id: str
    name: str
    cover_url: str | None
    release_date: date | None
    status: str
    external_pricing_id: str | None = None
    last_price: str | None = None
    last_price_updated: datetime | None = None
    created_at: datetime | None = None


__all__ = [
    "GAME_STATUSES",
    "GAME_STATUS_DONE",
    "GAME_STATUS_PLAYING",
    "GAME_STATUS_UNRELEASED",
    "GAME_STATUS_WISHLIST",
    "TrackedGame",
    "effective_status",
]
