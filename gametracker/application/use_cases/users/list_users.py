"""Use case for listing users."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from gametracker.domain.entities import User
from gametracker.infrastructure.repositories import UserRepository


def list_users(session: Session, skip: int = 0, limit: int | None = 100) -> Sequence[User]:
    """Return users ordered by username."""

    return UserRepository(session).list(skip=skip, limit=limit)
