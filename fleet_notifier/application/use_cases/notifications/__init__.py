"""Public helpers of the notification and reminder engine."""

from .candidates import (
    scan_incident_candidates,
    scan_license_candidates,
    scan_maintenance_candidates,
)
from .categories import REMINDER_CATEGORIES, ReminderCategory, get_category
from .delivery import DeliveryOutcome, EmailDeliveryWorker
from .engine import NotificationEngine, build_notification_engine
from .pipeline import DispatchPipeline
from .recipients import load_recipients, resolve_recipients
from .scheduler import CLEANUP_JOB, NotificationScheduler, SchedulerState
from .thresholds import load_thresholds, normalize_thresholds, should_remind
from .writer import NotificationWriter

__all__ = [
    "scan_incident_candidates",
    "scan_license_candidates",
    "scan_maintenance_candidates",
    "REMINDER_CATEGORIES",
    "ReminderCategory",
    "get_category",
    "DeliveryOutcome",
    "EmailDeliveryWorker",
    "NotificationEngine",
    "build_notification_engine",
    "DispatchPipeline",
    "load_recipients",
    "resolve_recipients",
    "CLEANUP_JOB",
    "NotificationScheduler",
    "SchedulerState",
    "load_thresholds",
    "normalize_thresholds",
    "should_remind",
    "NotificationWriter",
]
