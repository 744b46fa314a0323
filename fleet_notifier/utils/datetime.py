"""Helpers for working with timezone-aware datetimes and calendar days."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=16)
def resolve_timezone(tz_name: str | None) -> tzinfo:
    """Resolve ``tz_name`` into a ``tzinfo`` instance.

    Accepts IANA names (``Europe/Madrid``) and fixed offsets (``UTC+05:30``).
    Unknown values fall back to UTC.
    """

    name = (tz_name or "").strip() or _DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc


def now_in_timezone(tz_name: str | None = None) -> datetime:
    """Return the current time localized to ``tz_name``."""

    return datetime.now(tz=resolve_timezone(tz_name))


def today_in_timezone(tz_name: str | None = None) -> date:
    """Return the calendar day it currently is in ``tz_name``."""

    return now_in_timezone(tz_name).date()


def ensure_timezone(value: datetime | None, tz_name: str | None = None) -> datetime | None:
    """Normalize ``value`` so it is expressed in ``tz_name``."""

    if value is None:
        return None

    tz = resolve_timezone(tz_name)
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_naive_datetime(value: datetime | None, tz_name: str | None = None) -> datetime | None:
    """Return ``value`` localized to ``tz_name`` but without ``tzinfo``.

    ``DATETIME`` columns on some backends do not accept timezone-aware values, so
    the domain works with aware datetimes and stores the localized naive value.
    """

    localized = ensure_timezone(value, tz_name)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)


def days_between(start: date, end: date | datetime) -> int:
    """Return the whole number of days from ``start`` to ``end``.

    Time-of-day components are discarded, so the result is a pure calendar
    difference that may be negative.
    """

    if isinstance(end, datetime):
        end = end.date()
    return (end - start).days


__all__ = [
    "days_between",
    "ensure_naive_datetime",
    "ensure_timezone",
    "now_in_timezone",
    "resolve_timezone",
    "today_in_timezone",
]
