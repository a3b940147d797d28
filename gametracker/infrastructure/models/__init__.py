"""ORM models used by the application infrastructure."""

from .library_share import LibraryShareModel
from .login_attempt import LoginAttemptModel
from .notification_record import NotificationRecordModel
from .tracked_game import TrackedGameModel
from .user import UserModel

__all__ = [
    "LibraryShareModel",
    "LoginAttemptModel",
    "NotificationRecordModel",
    "TrackedGameModel",
    "UserModel",
]
