"""Use case for authenticating a user."""

from __future__ import annotations

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from gametracker.domain.entities import USER_ORIGIN_LDAP, User
from gametracker.infrastructure.directory import DirectoryClient
from gametracker.infrastructure.repositories import UserRepository
from gametracker.infrastructure.security import verify_password

from .get_or_create_user import get_or_create_user

logger = logging.getLogger(__name__)


def authenticate_user(
    session: Session,
    username: str,
    password: str,
    *,
    directory: DirectoryClient | None = None,
) -> User | None:
    """Return the user when the credentials are valid, ``None`` otherwise.

    Accounts with a local password hash are checked locally. Everybody else is
    checked against the directory when one is configured; a successful
    directory login creates or refreshes the local row.
    """

    repository = UserRepository(session)
    user = repository.get_by_username(username)

    if user is not None and user.password:
        return user if verify_password(password, user.password) else None

    directory = directory or DirectoryClient()
    if not directory.configured:
        return None

    entry = directory.authenticate(username, password)
    if entry is None:
        return None

    if user is None:
        logger.info("Creating account for directory user %s", entry.username)
        return get_or_create_user(
            session,
            entry.username,
            display_name=entry.display_name,
            email=entry.email,
            origin=USER_ORIGIN_LDAP,
        )

    refreshed = replace(
        user,
        display_name=entry.display_name or user.display_name,
        email=user.email or entry.email,
    )
    if refreshed != user:
        return repository.update(refreshed)
    return user
