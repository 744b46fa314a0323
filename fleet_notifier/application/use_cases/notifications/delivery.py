"""Best-effort email delivery for notifications that are already stored."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Protocol

from fleet_notifier.domain.entities import Notification, User
from fleet_notifier.domain.errors import DeliveryError, PersistenceError
from fleet_notifier.infrastructure.database import SessionFactory, session_scope

from .writer import NotificationWriter

logger = logging.getLogger(__name__)


class EmailSender(Protocol):
    def send_notification_email(
        self,
        to: str,
        name: str,
        notification_type: str,
        title: str,
        message: str,
        action_url: str | None = None,
        language: str | None = None,
    ) -> bool: ...


@dataclass(frozen=True)
class DeliveryOutcome:
    notification_id: int
    delivered: bool
    recorded: bool = False
    error: str | None = None


class EmailDeliveryWorker:
    """Send notification emails on background threads.

    Deliveries are fire-and-forget for the caller: :meth:`submit` returns at
    once and failures are only logged. Outcomes are written back through a
    fresh :class:`NotificationWriter` session. Nothing is retried.
    """

    def __init__(
        self,
        sender: EmailSender,
        session_factory: SessionFactory,
        *,
        max_workers: int = 4,
        tz_name: str | None = None,
    ) -> None:
        self._sender = sender
        self._session_factory = session_factory
        self._tz_name = tz_name
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="notification-email"
        )
        self._pending: set[Future] = set()
        self._lock = threading.Lock()

    def submit(self, notification: Notification, recipient: User) -> Future:
        """Schedule the email for an already committed ``notification``."""

        if notification.id is None:
            raise ValueError("Only stored notifications can be emailed")
        future = self._executor.submit(self._deliver, notification, recipient)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def drain(self, timeout: float | None = None) -> list[DeliveryOutcome]:
        """Wait for outstanding deliveries and return their outcomes."""

        with self._lock:
            pending = list(self._pending)
        done, not_done = wait(pending, timeout=timeout)
        if not_done:
            logger.warning("%s email deliveries still pending after drain", len(not_done))
        return [future.result() for future in done]

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def shutdown(self, wait_for_pending: bool = True) -> None:
        self._executor.shutdown(wait=wait_for_pending)

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def _deliver(self, notification: Notification, recipient: User) -> DeliveryOutcome:
        try:
            self._send(notification, recipient)
        except DeliveryError as exc:
            logger.warning("%s", exc)
            return DeliveryOutcome(notification.id, delivered=False, error=str(exc))

        try:
            with session_scope(self._session_factory) as session:
                recorded = NotificationWriter(session, tz_name=self._tz_name).record_email_sent(
                    notification.id
                )
        except PersistenceError as exc:
            logger.error("Email sent but delivery flag not stored: %s", exc)
            return DeliveryOutcome(notification.id, delivered=True, error=str(exc))
        return DeliveryOutcome(notification.id, delivered=True, recorded=recorded)

    def _send(self, notification: Notification, recipient: User) -> None:
        try:
            delivered = self._sender.send_notification_email(
                recipient.email,
                recipient.name,
                notification.category,
                notification.title,
                notification.message,
                notification.action_url,
                recipient.language_preference,
            )
        except Exception as exc:  # the collaborator owns its failure modes
            raise DeliveryError(
                f"Email for notification {notification.id} to {recipient.email} failed: {exc}"
            ) from exc
        if not delivered:
            raise DeliveryError(
                f"Email for notification {notification.id} to {recipient.email} was not accepted"
            )


__all__ = ["DeliveryOutcome", "EmailDeliveryWorker", "EmailSender"]
