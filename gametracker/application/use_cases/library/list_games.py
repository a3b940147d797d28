"""Use case for listing the games of a library."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from gametracker.domain.entities import TrackedGame
from gametracker.infrastructure.repositories import TrackedGameRepository, UserRepository


def list_games(session: Session, username: str) -> Sequence[TrackedGame]:
    """Return ``username``'s games ordered by name (empty for unknown users)."""

    user = UserRepository(session).get_by_username(username)
    if user is None:
        return []
    return TrackedGameRepository(session).list_for_user(user.id)
