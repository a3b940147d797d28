"""Render the text shared by every notification channel."""

from __future__ import annotations

from datetime import date

from gametracker.domain.entities import (
    EVENT_KIND_ADDED,
    EVENT_KIND_STATUS,
    EVENT_KIND_TEST,
    REMINDER_KIND_30_DAYS,
    REMINDER_KIND_7_DAYS,
    REMINDER_KIND_RELEASE,
    NotificationMessage,
)

_STATUS_LABELS = {
    "wishlist": "Wishlist",
    "playing": "Playing",
    "done": "Done",
    "unreleased": "Unreleased",
}


def _status_label(status: str | None) -> str:
    return _STATUS_LABELS.get(status or "", status or "unknown")


def release_text(days_until: int | None) -> str:
    """Describe a day offset the way people say it."""

    if days_until is None:
        return "has no release date yet"
    if days_until == 0:
        return "releases today"
    if days_until > 0:
        return f"releases in {days_until} day{'s' if days_until != 1 else ''}"
    days_ago = -days_until
    return f"released {days_ago} day{'s' if days_ago != 1 else ''} ago"


def build_message(
    kind: str,
    *,
    game_name: str,
    release_date: date | None = None,
    days_until: int | None = None,
    status: str | None = None,
) -> NotificationMessage:
    """Return the subject, body and push title for a notification of ``kind``."""

    date_text = release_date.isoformat() if release_date else "TBA"

    if kind in (REMINDER_KIND_30_DAYS, REMINDER_KIND_7_DAYS):
        when = release_text(days_until)
        subject = f"{game_name} {when}"
        body = f"{game_name} {when} ({date_text}). Get ready!"
        title = "Upcoming release"
    elif kind == REMINDER_KIND_RELEASE:
        subject = f"{game_name} has been released!"
        body = f"{game_name} has been released ({date_text})."
        if status:
            body += f" It is now in your {_status_label(status)} list."
        title = "Game released"
    elif kind == EVENT_KIND_ADDED:
        subject = f"{game_name} was added to your library"
        body = f"{game_name} was added to your library. Release date: {date_text}."
        title = "Library updated"
    elif kind == EVENT_KIND_STATUS:
        label = _status_label(status)
        subject = f"{game_name} is now {label}"
        body = f"The status of {game_name} changed to {label}."
        title = "Status changed"
    elif kind == EVENT_KIND_TEST:
        subject = f"Test notification: {game_name}"
        body = f"This is a test notification. {game_name} {release_text(days_until)} ({date_text})."
        title = "Test notification"
    else:
        raise ValueError(f"Unknown notification kind '{kind}'")

    return NotificationMessage(
        subject=subject,
        body=body,
        title=title,
    )


__all__ = ["build_message", "release_text"]
