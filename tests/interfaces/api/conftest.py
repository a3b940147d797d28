"""Fixtures for exercising the HTTP API against an in-memory database."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from gametracker.application.use_cases.notifications import NotificationDispatcher
from gametracker.application.use_cases.users import create_user
from gametracker.config import Settings
from gametracker.infrastructure.database import get_db
from gametracker.interfaces.api.dependencies import get_dispatcher, get_session_factory
from main import create_app

PASSWORD = "correct-horse"


class Outbox:
    """Collects what the dispatcher would have delivered."""

    def __init__(self) -> None:
        self.emails: list[tuple[str, str, str]] = []
        self.pushes: list[tuple[str, str, str]] = []

    def send_email(self, subject: str, body: str, recipient: str) -> None:
        self.emails.append((subject, body, recipient))

    async def send_push(self, title, message, topic, *, timeout, base_url=None) -> None:
        self.pushes.append((title, message, topic))


@pytest.fixture
def outbox() -> Outbox:
    return Outbox()


@pytest.fixture
def configured_dispatcher(outbox: Outbox) -> NotificationDispatcher:
    settings = Settings(
        _env_file=None,
        sendgrid_api_key="SG.fake",
        sendgrid_sender="bot@example.com",
        ntfy_base_url="https://ntfy.example",
    )
    return NotificationDispatcher(
        settings=settings,
        email_sender=outbox.send_email,
        push_sender=outbox.send_push,
    )


@pytest.fixture
def app(session_factory):
    application = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_session_factory] = lambda: session_factory
    return application


@pytest.fixture
def client(app, configured_dispatcher) -> TestClient:
    app.dependency_overrides[get_dispatcher] = lambda: configured_dispatcher
    return TestClient(app)


@pytest.fixture
def register(session) -> Callable[..., None]:
    def _register(username: str, *, admin: bool = False, email: str | None = None) -> None:
        create_user(
            session,
            username=username,
            password=PASSWORD,
            email=email,
            can_manage_users=admin,
        )

    return _register


@pytest.fixture
def login(client: TestClient) -> Callable[..., dict[str, str]]:
    """Return a helper that logs in and builds the bearer header."""

    def _login(username: str, password: str = PASSWORD) -> dict[str, str]:
        response = client.post("/auth/token", data={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
