"""Sole writer of notification state."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fleet_notifier.domain.entities import (
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    Notification,
    RelatedEntity,
)
from fleet_notifier.domain.errors import PersistenceError
from fleet_notifier.infrastructure.repositories import NotificationRepository
from fleet_notifier.utils import now_in_timezone

logger = logging.getLogger(__name__)


class NotificationWriter:
    """Create notifications and mutate their read/email flags.

    Every write commits immediately. Failures roll the session back and are
    raised as :class:`PersistenceError` so callers can skip a single row.
    """

    def __init__(self, session: Session, *, tz_name: str | None = None) -> None:
        self.session = session
        self.tz_name = tz_name
        self.repository = NotificationRepository(session, tz_name=tz_name)

    def write(
        self,
        recipient_id: int,
        category: str,
        title: str,
        message: str,
        priority: str,
        related_entity: RelatedEntity | None = None,
        expires_at: datetime | None = None,
        *,
        action_url: str | None = None,
    ) -> Notification:
        """Insert a new notification row; no check is made for duplicates."""

        if category not in NOTIFICATION_CATEGORIES:
            raise ValueError(f"Unknown notification category: {category}")
        if priority not in NOTIFICATION_PRIORITIES:
            raise ValueError(f"Unknown notification priority: {priority}")

        notification = Notification(
            id=None,
            recipient_id=recipient_id,
            category=category,
            title=title,
            message=message,
            priority=priority,
            related_entity_type=related_entity.entity_type if related_entity else None,
            related_entity_id=related_entity.entity_id if related_entity else None,
            action_url=action_url,
            expires_at=expires_at,
            created_at=now_in_timezone(self.tz_name),
        )
        try:
            return self.repository.create(notification)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(
                f"Could not store {category} notification for user {recipient_id}"
            ) from exc

    def mark_read(self, notification_id: int, owner_id: int) -> None:
        """Mark one notification read; a no-op for other users' notifications."""

        self.mark_many_read([notification_id], owner_id)

    def mark_many_read(self, notification_ids: Iterable[int], owner_id: int) -> None:
        self._run(
            lambda: self.repository.mark_as_read(notification_ids, recipient_id=owner_id),
            f"mark notifications read for user {owner_id}",
        )

    def mark_all_read(self, owner_id: int) -> None:
        self._run(
            lambda: self.repository.mark_all_as_read(recipient_id=owner_id),
            f"mark all notifications read for user {owner_id}",
        )

    def delete_expired(self, now: datetime | None = None) -> int:
        """Delete notifications whose ``expires_at`` is set and in the past."""

        deleted = self._run(
            lambda: self.repository.delete_expired(now=now),
            "delete expired notifications",
        )
        if deleted:
            logger.info("Deleted %s expired notifications", deleted)
        return deleted

    def record_email_sent(self, notification_id: int, sent_at: datetime | None = None) -> bool:
        """Flag the notification as emailed; returns ``False`` if it already was."""

        return self._run(
            lambda: self.repository.mark_email_sent(notification_id, sent_at=sent_at),
            f"record email delivery for notification {notification_id}",
        )

    def _run(self, operation, description: str):
        try:
            return operation()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(f"Could not {description}") from exc


__all__ = ["NotificationWriter"]
