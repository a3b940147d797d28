"""Endpoints related to authentication."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from gametracker.application.use_cases.users import (
    LoginThrottledError,
    authenticate_user,
    clear_failed_logins,
    ensure_login_allowed,
    record_failed_login,
)
from gametracker.config import get_settings
from gametracker.infrastructure.database import get_db
from gametracker.infrastructure.security import create_access_token
from gametracker.interfaces.api.schemas import Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/token", response_model=Token)
def login_for_access_token(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate a local or directory user and return a JWT.

    Each client address gets a limited number of failed attempts; after that
    every attempt is answered with 429 until the lockout window has passed.
    """

    client_key = _client_key(request)
    try:
        ensure_login_allowed(db, client_key)
    except LoginThrottledError as exc:
        logger.warning(
            "Refused login for %s from locked out client %s", form_data.username, client_key
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(exc),
            headers={"Retry-After": str(exc.retry_after_minutes * 60)},
        ) from exc

    user = authenticate_user(db, form_data.username, form_data.password)
    if user is None:
        failures = record_failed_login(db, client_key)
        logger.info("Rejected login for %s (%s failures)", form_data.username, failures)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    clear_failed_logins(db, client_key)

    settings = get_settings()
    access_token = create_access_token(
        data={"sub": user.username},
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "username": user.username,
        "can_manage_users": user.can_manage_users,
    }
