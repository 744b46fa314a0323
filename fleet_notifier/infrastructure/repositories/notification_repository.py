"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from fleet_notifier.domain.entities import Notification
from fleet_notifier.infrastructure.models import NotificationModel
from fleet_notifier.utils import ensure_naive_datetime, ensure_timezone, now_in_timezone


class NotificationRepository:
    """Provide persistence operations for :class:`Notification` objects."""

    def __init__(self, session: Session, *, tz_name: str | None = None) -> None:
        self.session = session
        self.tz_name = tz_name

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        recipient_id: int,
        *,
        unread_only: bool = False,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.recipient_id == recipient_id)
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, recipient_id: int) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.is_read.is_(False))
            .scalar()
            or 0
        )

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(
        self,
        notification_ids: Iterable[int],
        *,
        recipient_id: int,
        read_at: datetime | None = None,
    ) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.is_read.is_(False),
            )
            .update(self._read_values(read_at), synchronize_session=False)
        )
        self.session.commit()
        return updated

    def mark_all_as_read(self, *, recipient_id: int, read_at: datetime | None = None) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.is_read.is_(False),
            )
            .update(self._read_values(read_at), synchronize_session=False)
        )
        self.session.commit()
        return updated

    def mark_email_sent(self, notification_id: int, *, sent_at: datetime | None = None) -> bool:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.email_sent.is_(False),
            )
            .update(
                {
                    NotificationModel.email_sent: True,
                    NotificationModel.email_sent_at: self._naive(
                        sent_at or now_in_timezone(self.tz_name)
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return bool(updated)

    def delete_expired(self, *, now: datetime | None = None) -> int:
        cutoff = self._naive(now or now_in_timezone(self.tz_name))
        deleted = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.expires_at.is_not(None),
                NotificationModel.expires_at < cutoff,
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def _read_values(self, read_at: datetime | None) -> dict:
        return {
            NotificationModel.is_read: True,
            NotificationModel.read_at: self._naive(read_at or now_in_timezone(self.tz_name)),
        }

    def _naive(self, value: datetime | None) -> datetime | None:
        return ensure_naive_datetime(value, self.tz_name)

    def _apply_entity_to_model(
        self, model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = self._naive(
            notification.created_at or now_in_timezone(self.tz_name)
        )
        model.recipient_id = notification.recipient_id
        model.category = notification.category
        model.title = notification.title
        model.message = notification.message
        model.priority = notification.priority
        model.is_read = notification.read
        model.read_at = self._naive(notification.read_at)
        model.email_sent = notification.email_sent
        model.email_sent_at = self._naive(notification.email_sent_at)
        model.related_entity_type = notification.related_entity_type
        model.related_entity_id = notification.related_entity_id
        model.action_url = notification.action_url
        model.expires_at = self._naive(notification.expires_at)

    def _to_entity(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            category=model.category,
            title=model.title,
            message=model.message,
            priority=model.priority,
            read=bool(model.is_read),
            read_at=ensure_timezone(model.read_at, self.tz_name),
            email_sent=bool(model.email_sent),
            email_sent_at=ensure_timezone(model.email_sent_at, self.tz_name),
            related_entity_type=model.related_entity_type,
            related_entity_id=model.related_entity_id,
            action_url=model.action_url,
            expires_at=ensure_timezone(model.expires_at, self.tz_name),
            created_at=ensure_timezone(model.created_at, self.tz_name),
        )


__all__ = ["NotificationRepository"]
