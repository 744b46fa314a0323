"""Domain entities exposed by the application."""

from .candidate import CandidateRecord
from .email_template import EmailTemplate
from .job_result import DispatchOutcome, JobResult, SchedulerRunReport
from .notification import (
    CATEGORY_DOCUMENT_EXPIRY,
    CATEGORY_INCIDENT_ALERT,
    CATEGORY_LICENSE_EXPIRY,
    CATEGORY_MAINTENANCE_REMINDER,
    CATEGORY_SYSTEM,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    PRIORITY_CRITICAL,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    Notification,
    RelatedEntity,
)
from .source_records import (
    DRIVER_STATUS_ACTIVE,
    INCIDENT_STATUS_RESOLVED,
    MAINTENANCE_STATUS_COMPLETED,
    MAINTENANCE_STATUS_IN_PROGRESS,
    MAINTENANCE_STATUS_OVERDUE,
    MAINTENANCE_STATUS_SCHEDULED,
    Driver,
    Incident,
    MaintenanceRecord,
    Vehicle,
)
from .user import User

__all__ = [
    "CandidateRecord",
    "EmailTemplate",
    "DispatchOutcome",
    "JobResult",
    "SchedulerRunReport",
    "CATEGORY_DOCUMENT_EXPIRY",
    "CATEGORY_INCIDENT_ALERT",
    "CATEGORY_LICENSE_EXPIRY",
    "CATEGORY_MAINTENANCE_REMINDER",
    "CATEGORY_SYSTEM",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_PRIORITIES",
    "PRIORITY_CRITICAL",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "Notification",
    "RelatedEntity",
    "DRIVER_STATUS_ACTIVE",
    "INCIDENT_STATUS_RESOLVED",
    "MAINTENANCE_STATUS_COMPLETED",
    "MAINTENANCE_STATUS_IN_PROGRESS",
    "MAINTENANCE_STATUS_OVERDUE",
    "MAINTENANCE_STATUS_SCHEDULED",
    "Driver",
    "Incident",
    "MaintenanceRecord",
    "Vehicle",
    "User",
]
