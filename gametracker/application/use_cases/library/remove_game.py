"""Use case for removing a game from a library."""

from sqlalchemy.orm import Session

from gametracker.infrastructure.repositories import TrackedGameRepository, UserRepository


def remove_game(session: Session, *, username: str, game_id: str) -> None:
    user = UserRepository(session).get_by_username(username)
    if user is None or not TrackedGameRepository(session).delete(user.id, game_id):
        raise ValueError("Game not found in library")
