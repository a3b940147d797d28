"""Tests for the periodic job registration."""

from __future__ import annotations

import asyncio

import pytest

from gametracker.config import Settings
from gametracker.interfaces.scheduler import (
    PRICE_REFRESH_JOB_ID,
    RELEASE_SWEEP_JOB_ID,
    JobScheduler,
)


def _fields(job) -> dict[str, str]:
    return {field.name: str(field) for field in job.trigger.fields}


@pytest.mark.anyio
async def test_jobs_are_registered_with_configured_times() -> None:
    settings = Settings(
        _env_file=None,
        reminder_sweep_hour=6,
        price_refresh_day_of_week="sun",
        price_refresh_hour=4,
    )
    scheduler = JobScheduler(settings)

    scheduler.register_jobs()

    sweep = scheduler.scheduler.get_job(RELEASE_SWEEP_JOB_ID)
    refresh = scheduler.scheduler.get_job(PRICE_REFRESH_JOB_ID)
    assert _fields(sweep)["hour"] == "6"
    assert _fields(sweep)["minute"] == "0"
    assert _fields(refresh)["day_of_week"] == "sun"
    assert _fields(refresh)["hour"] == "4"
    assert sweep.max_instances == 1
    assert sweep.coalesce is True


@pytest.mark.anyio
async def test_start_and_shutdown() -> None:
    scheduler = JobScheduler(Settings(_env_file=None))

    scheduler.start()
    try:
        assert scheduler.scheduler.running
        assert {job.id for job in scheduler.scheduler.get_jobs()} == {
            PRICE_REFRESH_JOB_ID,
            RELEASE_SWEEP_JOB_ID,
        }
    finally:
        scheduler.shutdown()

    # The asyncio scheduler applies the shutdown on its event loop.
    await asyncio.sleep(0.05)
    assert not scheduler.scheduler.running
