"""Use cases driving release reminders."""

from .reminder_sweep import ReleaseReminderSweep, SweepSummary, run_reminder_sweep

__all__ = ["ReleaseReminderSweep", "SweepSummary", "run_reminder_sweep"]
