"""Tests for the daily release reminder sweep."""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from gametracker.application.use_cases.releases import ReleaseReminderSweep, run_reminder_sweep
from gametracker.infrastructure.models import NotificationRecordModel
from gametracker.infrastructure.repositories import (
    NotificationRecordRepository,
    TrackedGameRepository,
)

TODAY = date(2030, 3, 10)


def _sweep(session_factory, dispatcher) -> ReleaseReminderSweep:
    return ReleaseReminderSweep(session_factory, dispatcher, today=TODAY)


@pytest.mark.anyio
async def test_seven_day_reminder_for_alice(
    session, session_factory, make_user, track_game, recording_dispatcher
) -> None:
    alice = make_user("Alice")
    track_game(alice, "42", "Nova", release_date=TODAY + timedelta(days=7))

    summary = await _sweep(session_factory, recording_dispatcher).run()

    assert recording_dispatcher.calls == [
        {"kind": "7days", "game_id": "42", "username": "alice", "days_until": 7, "status": None}
    ]
    assert NotificationRecordRepository(session).was_sent("alice", 42, "7days")
    assert TrackedGameRepository(session).get(alice.id, "42").status == "unreleased"
    assert summary.reminders_sent == 1


@pytest.mark.anyio
async def test_thirty_day_reminder(
    session, session_factory, make_user, track_game, recording_dispatcher
) -> None:
    user = make_user("bob")
    track_game(user, "7", "Echo", release_date=TODAY + timedelta(days=30))

    await _sweep(session_factory, recording_dispatcher).run()

    assert recording_dispatcher.kinds() == ["30days"]
    assert NotificationRecordRepository(session).was_sent("bob", "7", "30days")


@pytest.mark.anyio
async def test_released_game_moves_to_wishlist_once(
    session, session_factory, make_user, track_game, recording_dispatcher
) -> None:
    user = make_user("carol")
    track_game(user, "1", "Past", release_date=TODAY - timedelta(days=1))

    first = await _sweep(session_factory, recording_dispatcher).run()
    second = await _sweep(session_factory, recording_dispatcher).run()

    assert recording_dispatcher.kinds() == ["release"]
    assert recording_dispatcher.calls[0]["status"] == "wishlist"
    assert TrackedGameRepository(session).get(user.id, "1").status == "wishlist"
    assert first.released == 1
    assert second.released == 0
    assert second.games_checked == 0


@pytest.mark.anyio
async def test_release_day_counts_as_released(
    session, session_factory, make_user, track_game, recording_dispatcher
) -> None:
    user = make_user("dave")
    track_game(user, "2", "Today", release_date=TODAY)

    await _sweep(session_factory, recording_dispatcher).run()

    assert recording_dispatcher.kinds() == ["release"]
    assert TrackedGameRepository(session).get(user.id, "2").status == "wishlist"


@pytest.mark.anyio
async def test_days_without_a_reminder_do_nothing(
    session, session_factory, make_user, track_game, recording_dispatcher
) -> None:
    user = make_user("erin")
    track_game(user, "15", "Mid", release_date=TODAY + timedelta(days=15))

    summary = await _sweep(session_factory, recording_dispatcher).run()

    assert recording_dispatcher.calls == []
    assert session.query(NotificationRecordModel).count() == 0
    assert summary.games_checked == 1


@pytest.mark.anyio
async def test_running_twice_sends_each_reminder_once(
    session_factory, make_user, track_game, recording_dispatcher
) -> None:
    user = make_user("frank")
    track_game(user, "a", "Soon", release_date=TODAY + timedelta(days=7))
    track_game(user, "b", "Later", release_date=TODAY + timedelta(days=30))

    await _sweep(session_factory, recording_dispatcher).run()
    await _sweep(session_factory, recording_dispatcher).run()

    assert sorted(recording_dispatcher.kinds()) == ["30days", "7days"]


@pytest.mark.anyio
async def test_games_outside_the_unreleased_state_are_ignored(
    session_factory, make_user, track_game, recording_dispatcher
) -> None:
    user = make_user("gina")
    track_game(user, "w", "Owned", release_date=TODAY + timedelta(days=7), status="wishlist")
    track_game(user, "u", "Unknown date", release_date=None, status="unreleased")

    summary = await _sweep(session_factory, recording_dispatcher).run()

    assert recording_dispatcher.calls == []
    assert summary.games_checked == 0


@pytest.mark.anyio
async def test_failed_dispatch_still_consumes_the_reminder(
    session, session_factory, make_user, track_game, recording_dispatcher
) -> None:
    user = make_user("hank")
    track_game(user, "9", "Flaky", release_date=TODAY + timedelta(days=7))
    recording_dispatcher.failing_users.add("hank")

    first = await _sweep(session_factory, recording_dispatcher).run()
    await _sweep(session_factory, recording_dispatcher).run()

    assert first.errors == 1
    assert recording_dispatcher.kinds() == ["7days"]
    assert NotificationRecordRepository(session).was_sent("hank", "9", "7days")


@pytest.mark.anyio
async def test_one_failing_user_does_not_stop_the_others(
    session, session_factory, make_user, track_game, recording_dispatcher
) -> None:
    broken = make_user("aaron")
    healthy = make_user("zoe")
    track_game(broken, "1", "Nova", release_date=TODAY + timedelta(days=7))
    track_game(healthy, "1", "Nova", release_date=TODAY + timedelta(days=7))
    recording_dispatcher.failing_users.add("aaron")

    summary = await _sweep(session_factory, recording_dispatcher).run()

    assert [call["username"] for call in recording_dispatcher.calls] == ["aaron", "zoe"]
    assert summary.errors == 1
    assert summary.reminders_sent == 1
    assert NotificationRecordRepository(session).was_sent("zoe", "1", "7days")


@pytest.mark.anyio
async def test_database_error_for_one_user_does_not_stop_the_others(
    session, session_factory, make_user, track_game, recording_dispatcher, monkeypatch
) -> None:
    broken = make_user("aaron")
    healthy = make_user("zoe")
    track_game(broken, "1", "Nova", release_date=TODAY + timedelta(days=7))
    track_game(healthy, "1", "Nova", release_date=TODAY + timedelta(days=7))
    original = TrackedGameRepository.list_awaiting_release

    def list_awaiting_release(self, user_id):
        if user_id == broken.id:
            raise OperationalError("SELECT ...", {}, Exception("database is locked"))
        return original(self, user_id)

    monkeypatch.setattr(TrackedGameRepository, "list_awaiting_release", list_awaiting_release)

    summary = await _sweep(session_factory, recording_dispatcher).run()

    assert summary.errors == 1
    assert summary.users == 2
    assert summary.reminders_sent == 1
    assert [call["username"] for call in recording_dispatcher.calls] == ["zoe"]
    assert NotificationRecordRepository(session).was_sent("zoe", "1", "7days")
    assert not NotificationRecordRepository(session).was_sent("aaron", "1", "7days")


def test_user_driven_status_change_wins_over_the_sweep(
    session, make_user, track_game
) -> None:
    """The release transition only applies to rows that are still unreleased."""

    user = make_user("ivy")
    track_game(user, "3", "Raced", release_date=TODAY - timedelta(days=2))
    repository = TrackedGameRepository(session)
    repository.update_metadata(user.id, "3", changes={"status": "playing"})

    assert repository.mark_released(user.id, "3") is False
    assert repository.get(user.id, "3").status == "playing"


@pytest.mark.anyio
async def test_run_reminder_sweep_entry_point(
    session_factory, make_user, track_game, recording_dispatcher
) -> None:
    user = make_user("jack")
    track_game(user, "5", "Nova", release_date=TODAY + timedelta(days=30))

    summary = await run_reminder_sweep(
        session_factory=session_factory, dispatcher=recording_dispatcher, today=TODAY
    )

    assert summary.as_dict() == {
        "users": 1,
        "games_checked": 1,
        "released": 0,
        "reminders_sent": 1,
        "errors": 0,
    }
