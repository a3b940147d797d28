"""Use case for creating users."""

from sqlalchemy.orm import Session

from gametracker.domain.entities import USER_ORIGIN_LOCAL, User, canonical_username
from gametracker.infrastructure.repositories import UserRepository
from gametracker.infrastructure.security import get_password_hash
from gametracker.utils import now_in_app_naive_datetime

from .update_user import MIN_PASSWORD_LENGTH


def create_user(
    session: Session,
    *,
    username: str,
    password: str | None,
    display_name: str | None = None,
    email: str | None = None,
    can_manage_users: bool = False,
    origin: str = USER_ORIGIN_LOCAL,
) -> User:
    """Create a new user ensuring unique (case-insensitive) usernames."""

    repository = UserRepository(session)
    username = canonical_username(username)
    if not username:
        raise ValueError("Username is required")

    if repository.get_by_username(username):
        msg = f"User '{username}' already exists"
        raise ValueError(msg)

    if origin == USER_ORIGIN_LOCAL and not password:
        raise ValueError("Local users need a password")
    if password and len(password) < MIN_PASSWORD_LENGTH:
        msg = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        raise ValueError(msg)

    user = User(
        id=None,
        username=username,
        display_name=display_name or username,
        email=email,
        ntfy_topic=None,
        password=get_password_hash(password) if password else None,
        can_manage_users=can_manage_users,
        origin=origin,
        shares_library=False,
        created_at=now_in_app_naive_datetime(),
    )
    return repository.create(user)
