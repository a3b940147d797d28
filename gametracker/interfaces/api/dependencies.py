"""FastAPI dependency utilities."""

from collections.abc import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from gametracker.application.use_cases.notifications import (
    NotificationDispatcher,
    email_memory,
)
from gametracker.domain.entities import User
from gametracker.infrastructure.directory import DirectoryClient
from gametracker.infrastructure.database import SessionLocal, get_db
from gametracker.infrastructure.repositories import UserRepository
from gametracker.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    username = payload.get("sub")
    if not isinstance(username, str) or not username:
        raise _credentials_error()

    user = UserRepository(db).get_by_username(username)
    if user is None:
        raise _credentials_error("User not found")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user may manage users."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user


def get_session_factory() -> Callable[[], Session]:
    """Return the session factory used by background jobs started from the API."""

    return SessionLocal


def get_dispatcher(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> NotificationDispatcher:
    """Return a dispatcher that remembers directory emails on the user row."""

    return NotificationDispatcher(remember_email=email_memory(session_factory))


def get_directory() -> DirectoryClient:
    return DirectoryClient()
