"""Aggregate application use cases."""

from .notifications import NotificationScheduler, build_notification_engine

__all__ = [
    "NotificationScheduler",
    "build_notification_engine",
]
