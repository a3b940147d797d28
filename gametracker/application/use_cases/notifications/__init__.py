"""Use cases for composing and delivering notifications."""

from .dispatcher import NotificationConfigurationError, NotificationDispatcher, email_memory
from .messages import build_message, release_text
from .send_test_notification import (
    SERVICES,
    SERVICE_BOTH,
    SentTestNotification,
    send_test_notification,
)

__all__ = [
    "NotificationConfigurationError",
    "NotificationDispatcher",
    "SERVICES",
    "SERVICE_BOTH",
    "SentTestNotification",
    "build_message",
    "email_memory",
    "release_text",
    "send_test_notification",
]
