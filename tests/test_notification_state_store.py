"""Tests for the durable record of sent release reminders."""

from __future__ import annotations

import pytest

from gametracker.infrastructure.models import NotificationRecordModel
from gametracker.infrastructure.repositories import NotificationRecordRepository


def test_unknown_keys_are_not_sent(session) -> None:
    store = NotificationRecordRepository(session)

    assert store.was_sent("alice", "42", "7days") is False


def test_mark_sent_is_idempotent(session) -> None:
    """Marking the same key repeatedly leaves exactly one record."""

    store = NotificationRecordRepository(session)

    for _ in range(3):
        store.mark_sent("alice", "42", "7days")

    assert store.was_sent("alice", "42", "7days") is True
    assert session.query(NotificationRecordModel).count() == 1


def test_keys_are_canonicalized(session) -> None:
    store = NotificationRecordRepository(session)

    store.mark_sent("  Alice ", 42, "30days")

    assert store.was_sent("ALICE", "42", "30days") is True
    assert store.was_sent("alice", 42, "7days") is False
    assert [record.username for record in store.list_for_user("alice")] == ["alice"]


def test_kinds_are_tracked_separately(session) -> None:
    store = NotificationRecordRepository(session)

    store.mark_sent("alice", "42", "30days")
    store.mark_sent("alice", "42", "7days")

    assert [record.kind for record in store.list_for_user("alice")] == ["30days", "7days"]


def test_records_survive_a_new_session(session_factory) -> None:
    first = session_factory()
    NotificationRecordRepository(first).mark_sent("alice", "42", "release")
    first.close()

    second = session_factory()
    try:
        assert NotificationRecordRepository(second).was_sent("alice", "42", "release")
    finally:
        second.close()


def test_unknown_kind_is_rejected(session) -> None:
    store = NotificationRecordRepository(session)

    with pytest.raises(ValueError):
        store.mark_sent("alice", "42", "added")
