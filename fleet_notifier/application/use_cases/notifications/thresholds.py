"""Decide whether a remaining day count deserves a reminder today."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fleet_notifier.config import Settings
from fleet_notifier.domain.entities import (
    CATEGORY_INCIDENT_ALERT,
    CATEGORY_LICENSE_EXPIRY,
    CATEGORY_MAINTENANCE_REMINDER,
)
from fleet_notifier.domain.errors import DataAccessError
from fleet_notifier.infrastructure.repositories import SettingRepository

logger = logging.getLogger(__name__)

SETTING_KEY_PREFIX = "reminder_days."


def should_remind(days_remaining: int, thresholds: Sequence[int]) -> bool:
    """Return ``True`` only on the exact days listed in ``thresholds``.

    There is no range matching: a day that is not run is a missed reminder.
    """

    return days_remaining in thresholds


def normalize_thresholds(values: Iterable[object] | None) -> list[int]:
    """Return distinct non-negative integers sorted from furthest to nearest."""

    if values is None:
        return []

    kept: set[int] = set()
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            logger.warning("Ignoring non-integer reminder threshold %r", value)
            continue
        if value < 0:
            logger.warning("Ignoring negative reminder threshold %s", value)
            continue
        kept.add(value)
    return sorted(kept, reverse=True)


def default_thresholds(category: str, settings: Settings) -> list[int]:
    defaults = {
        CATEGORY_MAINTENANCE_REMINDER: settings.maintenance_reminder_days,
        CATEGORY_LICENSE_EXPIRY: settings.license_expiry_reminder_days,
        CATEGORY_INCIDENT_ALERT: settings.incident_alert_days,
    }
    return list(defaults.get(category, []))


def load_thresholds(session: Session, category: str, settings: Settings) -> list[int]:
    """Return the threshold set for ``category``.

    A ``reminder_days.<category>`` system setting overrides the environment
    default; an empty list disables the category.
    """

    try:
        stored = SettingRepository(session).get_value(SETTING_KEY_PREFIX + category)
    except SQLAlchemyError as exc:
        raise DataAccessError(f"Could not load reminder thresholds for {category}") from exc

    if stored is None:
        return normalize_thresholds(default_thresholds(category, settings))
    if not isinstance(stored, list):
        logger.warning(
            "Setting %s%s is not a list (%r); using defaults",
            SETTING_KEY_PREFIX,
            category,
            stored,
        )
        return normalize_thresholds(default_thresholds(category, settings))
    return normalize_thresholds(stored)


__all__ = [
    "SETTING_KEY_PREFIX",
    "default_thresholds",
    "load_thresholds",
    "normalize_thresholds",
    "should_remind",
]
