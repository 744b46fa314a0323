"""Utility helpers for reusable functionality."""

from .datetime import (
    days_between,
    ensure_naive_datetime,
    ensure_timezone,
    now_in_timezone,
    resolve_timezone,
    today_in_timezone,
)

__all__ = [
    "days_between",
    "ensure_naive_datetime",
    "ensure_timezone",
    "now_in_timezone",
    "resolve_timezone",
    "today_in_timezone",
]
