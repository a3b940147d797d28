"""Use case for updating user information."""

from dataclasses import replace

from sqlalchemy.orm import Session

from gametracker.domain.entities import User
from gametracker.infrastructure.repositories import UserRepository
from gametracker.infrastructure.security import get_password_hash

MIN_PASSWORD_LENGTH = 8

_UNSET = object()


def update_user(
    session: Session,
    *,
    user_id: int,
    display_name: str | None = None,
    email: object = _UNSET,
    ntfy_topic: object = _UNSET,
    shares_library: bool | None = None,
    can_manage_users: bool | None = None,
    password: str | None = None,
) -> User:
    """Update the provided user with the new values.

    ``email`` and ``ntfy_topic`` are cleared by passing ``None`` or an empty
    string; leaving them out keeps the stored value.
    """

    repository = UserRepository(session)
    current_user = repository.get(user_id)
    if current_user is None:
        raise ValueError("User not found")

    updated_user = replace(
        current_user,
        display_name=(display_name or "").strip() or current_user.display_name,
        shares_library=(
            shares_library if shares_library is not None else current_user.shares_library
        ),
        can_manage_users=(
            can_manage_users if can_manage_users is not None else current_user.can_manage_users
        ),
    )
    if email is not _UNSET:
        updated_user = replace(updated_user, email=(email or "").strip() or None)
    if ntfy_topic is not _UNSET:
        updated_user = replace(updated_user, ntfy_topic=(ntfy_topic or "").strip() or None)

    if password:
        if len(password) < MIN_PASSWORD_LENGTH:
            msg = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            raise ValueError(msg)
        updated_user = replace(updated_user, password=get_password_hash(password))

    return repository.update(updated_user)
