"""Daily sweep that sends release reminders and releases due games."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import date

from sqlalchemy.orm import Session

from gametracker.domain.entities import (
    GAME_STATUS_WISHLIST,
    REMINDER_KIND_RELEASE,
    TrackedGame,
    User,
    reminder_kind_for_days,
)
from gametracker.infrastructure.database import SessionLocal
from gametracker.infrastructure.repositories import (
    NotificationRecordRepository,
    TrackedGameRepository,
    UserRepository,
)
from gametracker.utils import days_until, today_in_app_timezone

from gametracker.application.use_cases.notifications import NotificationDispatcher, email_memory

logger = logging.getLogger(__name__)

_sweep_lock = asyncio.Lock()


@dataclass
class SweepSummary:
    users: int = 0
    games_checked: int = 0
    released: int = 0
    reminders_sent: int = 0
    errors: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


class ReleaseReminderSweep:
    """One pass over every user's unreleased games.

    For each game with a release date:

    * on or after the release day the row is moved to ``wishlist`` with a
      conditional update, and a ``release`` event is dispatched only when this
      sweep performed the transition;
    * exactly 30 or 7 days before release a reminder of that kind is
      dispatched unless one was already recorded. The record is written after
      the attempt whatever its outcome, so every reminder is sent at most once.

    Other day counts do nothing. Each user is processed in its own session and
    a failure for one user or game never stops the others.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        dispatcher: NotificationDispatcher,
        *,
        today: date | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._dispatcher = dispatcher
        self._today = today

    async def run(self) -> SweepSummary:
        today = self._today or today_in_app_timezone()
        summary = SweepSummary()

        session = self._session_factory()
        try:
            users = UserRepository(session).list(limit=None)
        finally:
            session.close()

        for user in users:
            summary.users += 1
            try:
                await self._process_user(user, today, summary)
            except Exception:
                summary.errors += 1
                logger.exception("Release check for user %s failed", user.username)

        logger.info(
            "Release sweep for %s: %s users, %s games, %s released, %s reminders, %s errors",
            today.isoformat(),
            summary.users,
            summary.games_checked,
            summary.released,
            summary.reminders_sent,
            summary.errors,
        )
        return summary

    async def _process_user(self, user: User, today: date, summary: SweepSummary) -> None:
        session = self._session_factory()
        try:
            games = TrackedGameRepository(session)
            records = NotificationRecordRepository(session)
            for game in games.list_awaiting_release(user.id):
                summary.games_checked += 1
                try:
                    await self._process_game(user, game, today, games, records, summary)
                except Exception:
                    session.rollback()
                    summary.errors += 1
                    logger.exception(
                        "Release check for %s/%s failed", user.username, game.game_id
                    )
        finally:
            session.close()

    async def _process_game(
        self,
        user: User,
        game: TrackedGame,
        today: date,
        games: TrackedGameRepository,
        records: NotificationRecordRepository,
        summary: SweepSummary,
    ) -> None:
        diff = days_until(game.release_date, today=today)

        if diff <= 0:
            if not games.mark_released(user.id, game.game_id):
                return
            summary.released += 1
            logger.info("%s (%s) released for %s", game.name, game.game_id, user.username)
            await self._dispatcher.dispatch(
                REMINDER_KIND_RELEASE, game, user, days_until=diff, status=GAME_STATUS_WISHLIST
            )
            return

        kind = reminder_kind_for_days(diff)
        if kind is None or records.was_sent(user.username, game.game_id, kind):
            return

        try:
            await self._dispatcher.dispatch(kind, game, user, days_until=diff)
        finally:
            records.mark_sent(user.username, game.game_id, kind)
        summary.reminders_sent += 1


async def run_reminder_sweep(
    *,
    session_factory: Callable[[], Session] | None = None,
    dispatcher: NotificationDispatcher | None = None,
    today: date | None = None,
) -> SweepSummary:
    """Run one sweep; scheduled and on-demand runs never overlap."""

    session_factory = session_factory or SessionLocal
    dispatcher = dispatcher or NotificationDispatcher(
        remember_email=email_memory(session_factory)
    )
    async with _sweep_lock:
        return await ReleaseReminderSweep(session_factory, dispatcher, today=today).run()


__all__ = ["ReleaseReminderSweep", "SweepSummary", "run_reminder_sweep"]
