"""Scheduled runs of the release sweep and the price refresh."""

from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from gametracker.application.use_cases.prices import run_price_refresh
from gametracker.application.use_cases.releases import run_reminder_sweep
from gametracker.config import Settings, get_settings
from gametracker.utils import get_app_timezone

logger = logging.getLogger(__name__)

RELEASE_SWEEP_JOB_ID = "release_reminder_sweep"
PRICE_REFRESH_JOB_ID = "price_refresh"


async def _release_sweep_job() -> None:
    try:
        await run_reminder_sweep()
    except Exception:
        logger.exception("Scheduled release sweep failed")


async def _price_refresh_job() -> None:
    try:
        await run_price_refresh()
    except Exception:
        logger.exception("Scheduled price refresh failed")


class JobScheduler:
    """Owns the ``AsyncIOScheduler`` running the periodic jobs."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self.scheduler = AsyncIOScheduler(timezone=get_app_timezone())

    def register_jobs(self) -> None:
        settings = self._settings
        self.scheduler.add_job(
            _release_sweep_job,
            trigger=CronTrigger(hour=settings.reminder_sweep_hour, minute=0),
            id=RELEASE_SWEEP_JOB_ID,
            name="Daily release reminder sweep",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self.scheduler.add_job(
            _price_refresh_job,
            trigger=CronTrigger(
                day_of_week=settings.price_refresh_day_of_week,
                hour=settings.price_refresh_hour,
                minute=0,
            ),
            id=PRICE_REFRESH_JOB_ID,
            name="Weekly price refresh",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )

    def start(self) -> None:
        if self.scheduler.running:
            return
        self.register_jobs()
        self.scheduler.start()
        logger.info(
            "Job scheduler started (release sweep at %02d:00, price refresh on %s at %02d:00)",
            self._settings.reminder_sweep_hour,
            self._settings.price_refresh_day_of_week,
            self._settings.price_refresh_hour,
        )

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Job scheduler stopped")


__all__ = ["JobScheduler", "PRICE_REFRESH_JOB_ID", "RELEASE_SWEEP_JOB_ID"]
