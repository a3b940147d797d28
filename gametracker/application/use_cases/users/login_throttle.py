"""Use cases limiting repeated failed logins from one client."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from gametracker.config import get_settings
from gametracker.infrastructure.repositories import LoginAttemptRepository
from gametracker.utils import now_in_app_naive_datetime

logger = logging.getLogger(__name__)


class LoginThrottledError(Exception):
    """Raised while a client is locked out after too many failed logins."""

    def __init__(self, client_key: str, retry_after_minutes: int) -> None:
        super().__init__(
            f"Too many login attempts. Please try again in {retry_after_minutes} minutes."
        )
        self.client_key = client_key
        self.retry_after_minutes = retry_after_minutes


def ensure_login_allowed(
    session: Session,
    client_key: str,
    *,
    now: datetime | None = None,
    max_attempts: int | None = None,
    lockout_minutes: int | None = None,
) -> None:
    """Raise :class:`LoginThrottledError` when ``client_key`` is locked out.

    Failures are counted from the first failure of the window; once the
    window is older than ``lockout_minutes`` the counter starts over.
    """

    settings = get_settings()
    max_attempts = max_attempts or settings.login_max_attempts
    window = timedelta(minutes=lockout_minutes or settings.login_lockout_minutes)
    now = now or now_in_app_naive_datetime()

    repository = LoginAttemptRepository(session)
    attempt = repository.get(client_key)
    if attempt is None:
        return
    expires_at = attempt.first_failure_at + window
    if now >= expires_at:
        repository.clear(client_key)
        return
    if attempt.failures >= max_attempts:
        minutes = max(1, math.ceil((expires_at - now).total_seconds() / 60))
        raise LoginThrottledError(client_key, minutes)


def record_failed_login(
    session: Session, client_key: str, *, now: datetime | None = None
) -> int:
    """Count a failed login for ``client_key`` and return the running total."""

    attempt = LoginAttemptRepository(session).record_failure(
        client_key, now=now or now_in_app_naive_datetime()
    )
    if attempt.failures >= get_settings().login_max_attempts:
        logger.warning("Client %s reached %s failed logins", client_key, attempt.failures)
    return attempt.failures


def clear_failed_logins(session: Session, client_key: str) -> None:
    LoginAttemptRepository(session).clear(client_key)
