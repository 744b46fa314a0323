"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[int] = []
        seen: set[int] = set()
        for notification_id in self.ids:
            if notification_id in seen:
                continue
            seen.add(notification_id)
            unique.append(notification_id)
        return unique


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: int
    category: str
    title: str
    message: str
    priority: str
    read: bool
    read_at: datetime | None = None
    email_sent: bool
    email_sent_at: datetime | None = None
    related_entity_type: str | None = None
    related_entity_id: int | None = None
    action_url: str | None = None
    expires_at: datetime | None = None
    created_at: datetime


class UnreadCountRead(BaseModel):
    unread: int


class JobResultRead(BaseModel):
    job: str
    succeeded: bool
    detail: Any = None
    error: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None


class SchedulerRunRead(BaseModel):
    """Summary of a manually triggered notification run."""

    started_at: datetime
    finished_at: datetime | None = None
    succeeded: bool
    results: list[JobResultRead] = Field(default_factory=list)


__all__ = [
    "JobResultRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "SchedulerRunRead",
    "UnreadCountRead",
]
