"""Administrative "send a test notification" action."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from gametracker.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_PUSH,
    CHANNELS,
    EVENT_KIND_TEST,
    GAME_STATUS_UNRELEASED,
    REMINDER_KINDS,
    DispatchResult,
    TrackedGame,
    User,
)
from gametracker.utils import days_until, today_in_app_timezone

from .dispatcher import NotificationDispatcher
from .messages import release_text

SERVICE_BOTH = "both"
SERVICES: dict[str, tuple[str, ...]] = {
    CHANNEL_EMAIL: (CHANNEL_EMAIL,),
    CHANNEL_PUSH: (CHANNEL_PUSH,),
    SERVICE_BOTH: CHANNELS,
}


@dataclass
class SentTestNotification:
    result: DispatchResult
    game_info: dict[str, Any]

    def as_dict(self) -> dict[str, Any]:
        return {"results": self.result.as_dict(), "game_info": self.game_info}


async def send_test_notification(
    dispatcher: NotificationDispatcher,
    *,
    user: User,
    service: str = SERVICE_BOTH,
    game_id: str = "test",
    game_name: str = "Test Game",
    release_date: date | None = None,
    kind: str = EVENT_KIND_TEST,
    today: date | None = None,
) -> SentTestNotification:
    """Dispatch a one-off notification and report the outcome of every channel.

    Raises :class:`NotificationConfigurationError` when no channel is
    configured at all and ``ValueError`` for an unknown service or kind.
    """

    if service not in SERVICES:
        raise ValueError(f"Unknown notification service '{service}'")
    if kind != EVENT_KIND_TEST and kind not in REMINDER_KINDS:
        raise ValueError(f"Unknown notification kind '{kind}'")
    dispatcher.ensure_configured()

    today = today or today_in_app_timezone()
    diff = days_until(release_date, today=today) if release_date else None

    game = TrackedGame(
        id=None,
        user_id=user.id or 0,
        game_id=str(game_id),
        name=game_name,
        cover_url=None,
        release_date=release_date,
        status=GAME_STATUS_UNRELEASED,
    )
    result = await dispatcher.dispatch(
        kind, game, user, days_until=diff, channels=SERVICES[service]
    )
    game_info = {
        "name": game_name,
        "release_date": release_date.isoformat() if release_date else None,
        "days_until_release": diff,
        "release_text": release_text(diff),
    }
    return SentTestNotification(result=result, game_info=game_info)


__all__ = ["SERVICES", "SERVICE_BOTH", "SentTestNotification", "send_test_notification"]
