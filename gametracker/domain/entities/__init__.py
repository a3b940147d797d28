"""Domain entities exposed by the application."""

from .catalog import MergedResult, PriceQuote, ProviderResult
from .library_share import LibraryShare
from .login_attempt import LoginAttempt
from .notification import (
    CHANNELS,
    CHANNEL_EMAIL,
    CHANNEL_PUSH,
    EVENT_KIND_ADDED,
    EVENT_KIND_STATUS,
    EVENT_KIND_TEST,
    OUTCOME_FAILED,
    OUTCOME_SENT,
    OUTCOME_SKIPPED,
    REMINDER_KINDS,
    REMINDER_KIND_30_DAYS,
    REMINDER_KIND_7_DAYS,
    REMINDER_KIND_RELEASE,
    ChannelOutcome,
    DispatchResult,
    NotificationMessage,
    NotificationRecord,
    reminder_kind_for_days,
)
from .tracked_game import (
    GAME_STATUSES,
    GAME_STATUS_DONE,
    GAME_STATUS_PLAYING,
    GAME_STATUS_UNRELEASED,
    GAME_STATUS_WISHLIST,
    TrackedGame,
    effective_status,
)
from .user import USER_ORIGIN_LDAP, USER_ORIGIN_LOCAL, User, canonical_username

__all__ = [
    "CHANNELS",
    "CHANNEL_EMAIL",
    "CHANNEL_PUSH",
    "ChannelOutcome",
    "DispatchResult",
    "EVENT_KIND_ADDED",
    "EVENT_KIND_STATUS",
    "EVENT_KIND_TEST",
    "GAME_STATUSES",
    "GAME_STATUS_DONE",
    "GAME_STATUS_PLAYING",
    "GAME_STATUS_UNRELEASED",
    "GAME_STATUS_WISHLIST",
    "LibraryShare",
    "LoginAttempt",
    "MergedResult",
    "NotificationMessage",
    "NotificationRecord",
    "OUTCOME_FAILED",
    "OUTCOME_SENT",
    "OUTCOME_SKIPPED",
    "PriceQuote",
    "ProviderResult",
    "REMINDER_KINDS",
    "REMINDER_KIND_30_DAYS",
    "REMINDER_KIND_7_DAYS",
    "REMINDER_KIND_RELEASE",
    "TrackedGame",
    "USER_ORIGIN_LDAP",
    "USER_ORIGIN_LOCAL",
    "User",
    "canonical_username",
    "effective_status",
    "reminder_kind_for_days",
]
