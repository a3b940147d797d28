"""Tests for notification wording."""

from __future__ import annotations

from datetime import date

import pytest

from gametracker.application.use_cases.notifications import build_message, release_text


@pytest.mark.parametrize(
    ("days", "expected"),
    [
        (0, "releases today"),
        (1, "releases in 1 day"),
        (7, "releases in 7 days"),
        (-3, "released 3 days ago"),
        (None, "has no release date yet"),
    ],
)
def test_release_text(days, expected) -> None:
    assert release_text(days) == expected


def test_status_message_uses_readable_labels() -> None:
    message = build_message("status", game_name="Nova", release_date=date(2030, 1, 1), status="done")

    assert message.subject == "Nova is now Done"
    assert message.title == "Status changed"


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("wishlist", "Nova has been released (2030-01-01). It is now in your Wishlist list."),
        ("playing", "Nova has been released (2030-01-01). It is now in your Playing list."),
        (None, "Nova has been released (2030-01-01)."),
    ],
)
def test_release_message_follows_the_stored_status(status, expected) -> None:
    message = build_message("release", game_name="Nova", release_date=date(2030, 1, 1), status=status)

    assert message.body == expected


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_message("birthday", game_name="Nova")
