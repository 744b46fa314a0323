"""Scan, match, fan out and persist reminders for one category."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from fleet_notifier.config import Settings
from fleet_notifier.domain.entities import (
    CandidateRecord,
    DispatchOutcome,
    Notification,
    RelatedEntity,
    User,
)
from fleet_notifier.domain.errors import PersistenceError
from fleet_notifier.infrastructure.database import SessionFactory, session_scope
from fleet_notifier.utils import now_in_timezone, today_in_timezone

from .categories import ReminderCategory, get_category
from .delivery import EmailDeliveryWorker
from .recipients import load_recipients, resolve_recipients
from .thresholds import load_thresholds, should_remind
from .writer import NotificationWriter

logger = logging.getLogger(__name__)


class DispatchPipeline:
    """Orchestrate scanner, thresholds, recipients and writer for a category.

    Any :class:`DataAccessError` raised before the first write aborts the run
    for the category. A :class:`PersistenceError` only skips one recipient.
    Emails are handed to the delivery worker after each row is committed.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        settings: Settings,
        delivery: EmailDeliveryWorker | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings
        self._delivery = delivery

    def run(self, category: str | ReminderCategory, *, today: date | None = None) -> DispatchOutcome:
        rule = category if isinstance(category, ReminderCategory) else get_category(category)
        today = today or today_in_timezone(self._settings.app_timezone)
        outcome = DispatchOutcome(category=rule.name)

        with session_scope(self._session_factory) as session:
            thresholds = load_thresholds(session, rule.name, self._settings)
            if not thresholds:
                logger.info("No thresholds configured for %s; skipping", rule.name)
                return outcome

            candidates = rule.scan(session, today=today)
            outcome.candidates_scanned = len(candidates)
            matched = [
                candidate
                for candidate in candidates
                if should_remind(rule.day_count(candidate), thresholds)
            ]
            outcome.candidates_matched = len(matched)
            if not matched:
                logger.info(
                    "%s: %s candidates scanned, none on a reminder day",
                    rule.name,
                    len(candidates),
                )
                return outcome

            recipients = load_recipients(session, resolve_recipients(session, rule.name))
            if not recipients:
                logger.info("%s: no recipients opted in", rule.name)
                return outcome

            writer = NotificationWriter(session, tz_name=self._settings.app_timezone)
            expires_at = self._expires_at()
            for candidate in matched:
                for recipient in recipients:
                    notification = self._write_one(writer, rule, candidate, recipient, expires_at)
                    if notification is None:
                        outcome.notifications_failed += 1
                        continue
                    outcome.notifications_created += 1
                    outcome.notification_ids.append(notification.id)
                    if self._queue_email(notification, recipient):
                        outcome.emails_queued += 1

        logger.info(
            "%s: %s matched candidates, %s notifications created, %s failed, %s emails queued",
            rule.name,
            outcome.candidates_matched,
            outcome.notifications_created,
            outcome.notifications_failed,
            outcome.emails_queued,
        )
        return outcome

    def _write_one(
        self,
        writer: NotificationWriter,
        rule: ReminderCategory,
        candidate: CandidateRecord,
        recipient: User,
        expires_at: datetime | None,
    ) -> Notification | None:
        title, message = rule.content(candidate)
        try:
            return writer.write(
                recipient.id,
                rule.name,
                title,
                message,
                rule.priority(candidate),
                RelatedEntity(candidate.entity_type, candidate.entity_id),
                expires_at,
                action_url=rule.action_url(self._settings.app_url),
            )
        except PersistenceError as exc:
            logger.error(
                "%s: skipping recipient %s for %s %s: %s",
                rule.name,
                recipient.id,
                candidate.entity_type,
                candidate.entity_id,
                exc,
            )
            return None

    def _queue_email(self, notification: Notification, recipient: User) -> bool:
        if self._delivery is None or not recipient.wants_email():
            return False
        self._delivery.submit(notification, recipient)
        return True

    def _expires_at(self) -> datetime | None:
        retention = self._settings.notification_retention_days
        if retention is None:
            return None
        return now_in_timezone(self._settings.app_timezone) + timedelta(days=retention)


__all__ = ["DispatchPipeline"]
