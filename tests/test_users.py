"""Tests for user management use cases."""

from __future__ import annotations

import pytest

from gametracker.application.use_cases.sharing import list_shared_with, set_library_shares
from gametracker.application.use_cases.users import (
    authenticate_user,
    create_user,
    delete_user,
    list_users,
    update_user,
)
from gametracker.infrastructure.directory import DirectoryUser
from gametracker.infrastructure.repositories import UserRepository


class FakeDirectory:
    def __init__(self, accounts: dict[str, tuple[str, DirectoryUser]] | None = None) -> None:
        self._accounts = accounts or {}

    @property
    def configured(self) -> bool:
        return True

    def authenticate(self, username: str, password: str):
        account = self._accounts.get(username.lower())
        if account and account[0] == password:
            return account[1]
        return None


def test_create_user_rejects_duplicates_case_insensitively(session) -> None:
    create_user(session, username="Alice", password="correct-horse")

    with pytest.raises(ValueError, match="already exists"):
        create_user(session, username="ALICE", password="correct-horse")


def test_create_user_enforces_password_rules(session) -> None:
    with pytest.raises(ValueError, match="need a password"):
        create_user(session, username="bob", password=None)
    with pytest.raises(ValueError, match="at least 8"):
        create_user(session, username="bob", password="short")


def test_local_login(session) -> None:
    create_user(session, username="alice", password="correct-horse")

    assert authenticate_user(session, "Alice", "correct-horse").username == "alice"
    assert authenticate_user(session, "alice", "wrong-horse") is None


def test_directory_login_creates_the_account(session) -> None:
    directory = FakeDirectory(
        {"dana": ("s3cret", DirectoryUser("dana", "CN=Dana,DC=corp", "Dana Scully", "dana@corp.example"))}
    )

    user = authenticate_user(session, "Dana", "s3cret", directory=directory)

    assert user.origin == "ldap"
    assert user.email == "dana@corp.example"
    assert user.display_name == "Dana Scully"
    assert authenticate_user(session, "dana", "nope", directory=directory) is None


def test_update_user_clears_and_keeps_fields(session, make_user) -> None:
    alice = make_user("alice", email="alice@example.com", ntfy_topic="alice-games")

    updated = update_user(session, user_id=alice.id, ntfy_topic="", shares_library=True)

    assert updated.ntfy_topic is None
    assert updated.email == "alice@example.com"
    assert updated.shares_library is True
    with pytest.raises(ValueError):
        update_user(session, user_id=alice.id, password="short")


def test_delete_user_removes_shares_both_ways(session, make_user) -> None:
    alice = make_user("alice")
    bob = make_user("bob")
    make_user("carol")
    set_library_shares(session, owner="alice", to_usernames=["bob"])
    set_library_shares(session, owner="carol", to_usernames=["bob", "alice"])

    with pytest.raises(ValueError, match="own account"):
        delete_user(session, bob.id, acting_user_id=bob.id)

    delete_user(session, bob.id, acting_user_id=alice.id)

    assert UserRepository(session).get(bob.id) is None
    assert list_shared_with(session, "alice") == []
    assert list_shared_with(session, "carol") == ["alice"]
    assert [user.username for user in list_users(session)] == ["alice", "carol"]
