"""Aggregate application use cases."""

from .catalog import merge_search
from .prices import run_price_refresh
from .releases import run_reminder_sweep

__all__ = [
    "merge_search",
    "run_price_refresh",
    "run_reminder_sweep",
]
