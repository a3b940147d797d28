"""Shared fixtures for the test-suite."""

from __future__ import annotations

import os

# Configure the application before any ``gametracker`` module reads settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["APP_TIMEZONE"] = "UTC"
for _name in (
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "MAIL_DEFAULT_RECIPIENT",
    "NTFY_BASE_URL",
    "NTFY_DEFAULT_TOPIC",
    "LDAP_URL",
):
    os.environ.pop(_name, None)

from collections.abc import Callable, Iterator
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gametracker.domain.entities import (
    OUTCOME_SENT,
    USER_ORIGIN_LOCAL,
    ChannelOutcome,
    DispatchResult,
    TrackedGame,
    User,
)
from gametracker.infrastructure.database import initialize_database
from gametracker.infrastructure.repositories import TrackedGameRepository, UserRepository


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Return an isolated in-memory database with every table created."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    initialize_database(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> Callable[[], Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def session(session_factory: Callable[[], Session]) -> Iterator[Session]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_user(session: Session) -> Callable[..., User]:
    """Create users directly through the repository."""

    def _make_user(
        username: str,
        *,
        email: str | None = None,
        ntfy_topic: str | None = None,
        can_manage_users: bool = False,
        shares_library: bool = False,
    ) -> User:
        return UserRepository(session).create(
            User(
                id=None,
                username=username,
                display_name=username.title(),
                email=email,
                ntfy_topic=ntfy_topic,
                password=None,
                can_manage_users=can_manage_users,
                origin=USER_ORIGIN_LOCAL,
                shares_library=shares_library,
                created_at=None,
            )
        )

    return _make_user


@pytest.fixture
def track_game(session: Session) -> Callable[..., TrackedGame]:
    """Store a game in a user's library."""

    def _track_game(
        user: User,
        game_id: str,
        name: str,
        *,
        release_date: date | None,
        status: str = "unreleased",
        external_pricing_id: str | None = None,
        cover_url: str | None = None,
    ) -> TrackedGame:
        return TrackedGameRepository(session).upsert(
            TrackedGame(
                id=None,
                user_id=user.id,
                game_id=game_id,
                name=name,
                cover_url=cover_url,
                release_date=release_date,
                status=status,
                external_pricing_id=external_pricing_id,
            )
        )

    return _track_game


class RecordingDispatcher:
    """Dispatcher double that records every call.

    Users listed in ``failing_users`` make ``dispatch`` raise.
    """

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.failing_users: set[str] = set()

    def ensure_configured(self) -> None:
        return None

    async def dispatch(self, kind, game, user, *, days_until=None, status=None, channels=None):
        self.calls.append(
            {
                "kind": kind,
                "game_id": game.game_id,
                "username": user.username,
                "days_until": days_until,
                "status": status,
            }
        )
        if user.username in self.failing_users:
            raise RuntimeError("delivery exploded")
        sent = ChannelOutcome(status=OUTCOME_SENT)
        return DispatchResult(kind=kind, email=sent, push=sent)

    def kinds(self) -> list[str]:
        return [call["kind"] for call in self.calls]


@pytest.fixture
def recording_dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()
