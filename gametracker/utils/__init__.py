"""Utility helpers for reusable functionality."""

from .datetime import (
    days_until,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    parse_iso_date,
    today_in_app_timezone,
)

__all__ = [
    "days_until",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "parse_iso_date",
    "today_in_app_timezone",
]
