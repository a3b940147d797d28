"""Repository implementations for infrastructure layer."""

from .library_share_repository import LibraryShareRepository
from .login_attempt_repository import LoginAttemptRepository
from .notification_record_repository import NotificationRecordRepository
from .tracked_game_repository import TrackedGameRepository
from .user_repository import UserRepository

__all__ = [
    "LibraryShareRepository",
    "LoginAttemptRepository",
    "NotificationRecordRepository",
    "TrackedGameRepository",
    "UserRepository",
]
