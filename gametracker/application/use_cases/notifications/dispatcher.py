"""Deliver one notification event over every configured channel."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable

from sqlalchemy.orm import Session

from gametracker.config import Settings, get_settings
from gametracker.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_PUSH,
    CHANNELS,
    OUTCOME_SENT,
    ChannelOutcome,
    DispatchResult,
    NotificationMessage,
    TrackedGame,
    User,
)
from gametracker.infrastructure.directory import DirectoryClient
from gametracker.infrastructure.email import send_email
from gametracker.infrastructure.push import resolve_topic, send_push
from gametracker.infrastructure.repositories import UserRepository

from .messages import build_message

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, str], None]
PushSender = Callable[..., Awaitable[None]]
EmailMemory = Callable[[str, str], None]


class NotificationConfigurationError(RuntimeError):
    """Raised when no delivery channel is configured at all."""


class NotificationDispatcher:
    """Fan a single event out to email and push.

    Channels run concurrently and independently: an exception or timeout in
    one channel becomes that channel's ``failed`` outcome and never reaches the
    caller. Nothing is retried.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        directory: DirectoryClient | None = None,
        email_sender: EmailSender = send_email,
        push_sender: PushSender = send_push,
        remember_email: EmailMemory | None = None,
        timeout: float | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._directory = directory or DirectoryClient(self._settings)
        self._email_sender = email_sender
        self._push_sender = push_sender
        self._remember_email = remember_email
        self._timeout = timeout or self._settings.dispatch_timeout_seconds

    @property
    def email_available(self) -> bool:
        return self._settings.email_enabled

    @property
    def push_available(self) -> bool:
        return bool(self._settings.ntfy_base_url)

    def ensure_configured(self) -> None:
        if not (self.email_available or self.push_available):
            raise NotificationConfigurationError(
                "No notification channel is configured (set SendGrid or ntfy settings)"
            )

    async def dispatch(
        self,
        kind: str,
        game: TrackedGame,
        user: User,
        *,
        days_until: int | None = None,
        status: str | None = None,
        channels: Iterable[str] | None = None,
    ) -> DispatchResult:
        message = build_message(
            kind,
            game_name=game.name,
            release_date=game.release_date,
            days_until=days_until,
            status=status,
        )
        requested = set(channels) if channels is not None else set(CHANNELS)

        email, push = await asyncio.gather(
            self._deliver_email(user, message)
            if CHANNEL_EMAIL in requested
            else _not_requested(),
            self._deliver_push(user, message)
            if CHANNEL_PUSH in requested
            else _not_requested(),
        )
        result = DispatchResult(kind=kind, email=email, push=push)
        logger.info(
            "Dispatched %s for %s/%s: email=%s push=%s",
            kind,
            user.username,
            game.game_id,
            email.status,
            push.status,
        )
        return result

    async def resolve_email(self, user: User) -> str | None:
        """Return the stored email, else the directory's, else the fallback."""

        if user.email:
            return user.email

        email = None
        if self._directory.configured:
            try:
                email = await asyncio.wait_for(
                    self._directory.lookup_email(user.username), self._timeout
                )
            except asyncio.TimeoutError:
                logger.warning("Directory lookup for %s timed out", user.username)
            except Exception:
                logger.exception("Directory lookup for %s failed", user.username)

        if email:
            user.email = email
            if self._remember_email is not None:
                try:
                    self._remember_email(user.username, email)
                except Exception:
                    logger.exception("Could not store directory email for %s", user.username)
            return email

        return self._settings.mail_default_recipient or None

    async def _deliver_email(self, user: User, message: NotificationMessage) -> ChannelOutcome:
        if not self.email_available:
            return ChannelOutcome.skipped("email transport not configured")

        recipient = await self.resolve_email(user)
        if not recipient:
            return ChannelOutcome.skipped("no email address for user")

        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._email_sender, message.subject, message.body, recipient),
                self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Email to %s timed out after %ss", recipient, self._timeout)
            return ChannelOutcome.failed(f"timed out after {self._timeout}s", target=recipient)
        except Exception as exc:
            logger.warning("Email to %s failed: %s", recipient, exc)
            return ChannelOutcome.failed(str(exc), target=recipient)
        return ChannelOutcome(status=OUTCOME_SENT, target=recipient)

    async def _deliver_push(self, user: User, message: NotificationMessage) -> ChannelOutcome:
        if not self.push_available:
            return ChannelOutcome.skipped("push service not configured")

        topic = resolve_topic(user.ntfy_topic, self._settings.ntfy_default_topic or "")
        if not topic:
            return ChannelOutcome.skipped("no push topic for user")

        try:
            await asyncio.wait_for(
                self._push_sender(
                    message.title,
                    message.subject,
                    topic,
                    timeout=self._timeout,
                    base_url=self._settings.ntfy_base_url,
                ),
                self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Push to %s timed out after %ss", topic, self._timeout)
            return ChannelOutcome.failed(f"timed out after {self._timeout}s", target=topic)
        except Exception as exc:
            logger.warning("Push to %s failed: %s", topic, exc)
            return ChannelOutcome.failed(str(exc), target=topic)
        return ChannelOutcome(status=OUTCOME_SENT, target=topic)


async def _not_requested() -> ChannelOutcome:
    return ChannelOutcome.skipped("channel not requested")


def email_memory(session_factory: Callable[[], Session]) -> EmailMemory:
    """Return a callback that stores directory emails on the user row."""

    def remember(username: str, email: str) -> None:
        session = session_factory()
        try:
            UserRepository(session).set_email(username, email)
        finally:
            session.close()

    return remember


__all__ = [
    "NotificationConfigurationError",
    "NotificationDispatcher",
    "email_memory",
]
