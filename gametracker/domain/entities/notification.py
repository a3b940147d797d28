"""Domain entities describing release notifications and their delivery."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

REMINDER_KIND_30_DAYS = "30days"
REMINDER_KIND_7_DAYS = "7days"
REMINDER_KIND_RELEASE = "release"

REMINDER_KINDS: tuple[str, ...] = (
    REMINDER_KIND_30_DAYS,
    REMINDER_KIND_7_DAYS,
    REMINDER_KIND_RELEASE,
)

# Events that are only ever dispatched, never recorded in the sent log.
EVENT_KIND_ADDED = "added"
EVENT_KIND_STATUS = "status"
EVENT_KIND_TEST = "test"

_REMINDER_DAYS: dict[int, str] = {
    30: REMINDER_KIND_30_DAYS,
    7: REMINDER_KIND_7_DAYS,
    0: REMINDER_KIND_RELEASE,
}

CHANNEL_EMAIL = "email"
CHANNEL_PUSH = "ntfy"
CHANNELS: tuple[str, ...] = (CHANNEL_EMAIL, CHANNEL_PUSH)

OUTCOME_SENT = "sent"
OUTCOME_FAILED = "failed"
OUTCOME_SKIPPED = "skipped"


def reminder_kind_for_days(diff_days: int) -> str | None:
    """Return the reminder kind due exactly ``diff_days`` before release."""

    return _REMINDER_DAYS.get(diff_days)


@dataclass(frozen=True)
class NotificationRecord:
    """Marker stating that a reminder of ``kind`` was sent for a user's game."""

    username: str
    game_id: str
    kind: str
    sent_at: datetime | None = None


@dataclass(frozen=True)
class ChannelOutcome:
    """Result of attempting delivery over one channel."""

    status: str
    detail: str | None = None
    target: str | None = None

    @property
    def sent(self) -> bool:
        return self.status == OUTCOME_SENT

    @classmethod
    def skipped(cls, detail: str) -> "ChannelOutcome":
        return cls(status=OUTCOME_SKIPPED, detail=detail)

    @classmethod
    def failed(cls, detail: str, *, target: str | None = None) -> "ChannelOutcome":
        return cls(status=OUTCOME_FAILED, detail=detail, target=target)


@dataclass(frozen=True)
class DispatchResult:
    """Per-channel outcome of one dispatch."""

    kind: str
    email: ChannelOutcome
    push: ChannelOutcome

    @property
    def delivered(self) -> bool:
        """``True`` when at least one channel delivered the message."""

        return self.email.sent or self.push.sent

    def as_dict(self) -> dict[str, dict[str, str | None]]:
        return {
            CHANNEL_EMAIL: _outcome_to_dict(self.email),
            CHANNEL_PUSH: _outcome_to_dict(self.push),
        }


@dataclass
class NotificationMessage:
    """Rendered content shared by every channel."""

    subject: str
    body: str
    title: str


def _outcome_to_dict(outcome: ChannelOutcome) -> dict[str, str | None]:
    return {"status": outcome.status, "detail": outcome.detail, "target": outcome.target}


__all__ = [
    "CHANNELS",
    "CHANNEL_EMAIL",
    "CHANNEL_PUSH",
    "ChannelOutcome",
    "DispatchResult",
    "EVENT_KIND_ADDED",
    "EVENT_KIND_STATUS",
    "EVENT_KIND_TEST",
    "NotificationMessage",
    "NotificationRecord",
    "OUTCOME_FAILED",
    "OUTCOME_SENT",
    "OUTCOME_SKIPPED",
    "REMINDER_KINDS",
    "REMINDER_KIND_30_DAYS",
    "REMINDER_KIND_7_DAYS",
    "REMINDER_KIND_RELEASE",
    "reminder_kind_for_days",
]
