"""Schemas exposed by the HTTP interface."""

from .notification import (
    JobResultRead,
    NotificationMarkReadRequest,
    NotificationRead,
    SchedulerRunRead,
    UnreadCountRead,
)

__all__ = [
    "JobResultRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "SchedulerRunRead",
    "UnreadCountRead",
]
