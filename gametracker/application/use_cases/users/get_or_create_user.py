"""Use case resolving the account behind a username."""

from sqlalchemy.orm import Session

from gametracker.domain.entities import USER_ORIGIN_LOCAL, User, canonical_username
from gametracker.infrastructure.repositories import UserRepository
from gametracker.utils import now_in_app_naive_datetime


def get_or_create_user(
    session: Session,
    username: str,
    *,
    display_name: str | None = None,
    email: str | None = None,
    origin: str = USER_ORIGIN_LOCAL,
) -> User:
    """Return the user named ``username``, creating the row on first use."""

    username = canonical_username(username)
    if not username:
        raise ValueError("Username is required")

    repository = UserRepository(session)
    user = repository.get_by_username(username)
    if user is not None:
        return user

    return repository.create(
        User(
            id=None,
            username=username,
            display_name=display_name or username,
            email=email,
            ntfy_topic=None,
            password=None,
            can_manage_users=False,
            origin=origin,
            shares_library=False,
            created_at=now_in_app_naive_datetime(),
        )
    )
