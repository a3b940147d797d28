"""Tests for library sharing use cases."""

from __future__ import annotations

from datetime import date

import pytest

from gametracker.application.use_cases.sharing import (
    get_shared_library,
    list_public_libraries,
    list_shared_with,
    list_shared_with_me,
    revoke_share,
    set_library_shares,
)


def test_set_shares_normalizes_and_replaces(session, make_user) -> None:
    make_user("alice")
    make_user("bob")
    make_user("carol")

    stored = set_library_shares(session, owner="alice", to_usernames=["Carol", "bob", "BOB", "alice", ""])
    assert stored == ["bob", "carol"]

    set_library_shares(session, owner="alice", to_usernames=["carol"])
    assert list_shared_with(session, "alice") == ["carol"]


def test_unknown_users_are_rejected_without_changes(session, make_user) -> None:
    make_user("alice")
    make_user("bob")
    set_library_shares(session, owner="alice", to_usernames=["bob"])

    with pytest.raises(ValueError, match="Unknown users: mallory"):
        set_library_shares(session, owner="alice", to_usernames=["bob", "mallory"])

    assert list_shared_with(session, "alice") == ["bob"]


def test_shared_library_requires_a_grant(session, make_user, track_game) -> None:
    alice = make_user("alice")
    make_user("bob")
    track_game(alice, "42", "Nova", release_date=date(2031, 1, 1))

    with pytest.raises(PermissionError):
        get_shared_library(session, viewer="bob", owner="alice")

    set_library_shares(session, owner="alice", to_usernames=["bob"])
    games = get_shared_library(session, viewer="Bob", owner="Alice")
    assert [game.name for game in games] == ["Nova"]

    [(share, owner)] = list_shared_with_me(session, "bob")
    assert share.from_username == "alice"
    assert owner.display_name == "Alice"


def test_viewer_can_drop_a_share(session, make_user) -> None:
    make_user("alice")
    make_user("bob")
    set_library_shares(session, owner="alice", to_usernames=["bob"])

    revoke_share(session, viewer="bob", owner="alice")

    assert list_shared_with_me(session, "bob") == []
    with pytest.raises(ValueError, match="Share not found"):
        revoke_share(session, viewer="bob", owner="alice")


def test_public_libraries_lists_sharing_users(session, make_user) -> None:
    make_user("alice", shares_library=True)
    make_user("bob")

    assert [user.username for user in list_public_libraries(session)] == ["alice"]
