"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

CATEGORY_MAINTENANCE_REMINDER = "maintenance_reminder"
CATEGORY_LICENSE_EXPIRY = "license_expiry"
CATEGORY_INCIDENT_ALERT = "incident_alert"
CATEGORY_DOCUMENT_EXPIRY = "document_expiry"
CATEGORY_SYSTEM = "system"

NOTIFICATION_CATEGORIES = (
    CATEGORY_MAINTENANCE_REMINDER,
    CATEGORY_LICENSE_EXPIRY,
    CATEGORY_INCIDENT_ALERT,
    CATEGORY_DOCUMENT_EXPIRY,
    CATEGORY_SYSTEM,
)

PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"
PRIORITY_CRITICAL = "critical"

NOTIFICATION_PRIORITIES = (
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    PRIORITY_HIGH,
    PRIORITY_CRITICAL,
)


@dataclass(frozen=True)
class RelatedEntity:
    """Weak reference from a notification to the record that produced it."""

    entity_type: str
    entity_id: int


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    recipient_id: int
    category: str
    title: str
    message: str
    priority: str
    read: bool = False
    read_at: datetime | None = None
    email_sent: bool = False
    email_sent_at: datetime | None = None
    related_entity_type: str | None = None
    related_entity_id: int | None = None
    action_url: str | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def related_entity(self) -> RelatedEntity | None:
        if self.related_entity_type is None or self.related_entity_id is None:
            return None
        return RelatedEntity(self.related_entity_type, self.related_entity_id)


__all__ = [
    "CATEGORY_MAINTENANCE_REMINDER",
    "CATEGORY_LICENSE_EXPIRY",
    "CATEGORY_INCIDENT_ALERT",
    "CATEGORY_DOCUMENT_EXPIRY",
    "CATEGORY_SYSTEM",
    "NOTIFICATION_CATEGORIES",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "PRIORITY_HIGH",
    "PRIORITY_CRITICAL",
    "NOTIFICATION_PRIORITIES",
    "Notification",
    "RelatedEntity",
]
