"""Use case for deleting a user."""

from sqlalchemy.orm import Session

from gametracker.infrastructure.repositories import LibraryShareRepository, UserRepository


def delete_user(session: Session, user_id: int, *, acting_user_id: int | None = None) -> None:
    """Delete the specified user, their games and every share involving them."""

    if acting_user_id is not None and acting_user_id == user_id:
        raise ValueError("You cannot delete your own account")

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")

    shares = LibraryShareRepository(session)
    shares.replace_for(user.username, [])
    for share in shares.list_to(user.username):
        shares.delete(share.from_username, user.username)
    repository.delete(user_id)
