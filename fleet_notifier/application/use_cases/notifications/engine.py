"""Process-wide wiring of the notification engine components."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fleet_notifier.config import Settings
from fleet_notifier.infrastructure.database import (
    build_engine,
    build_session_factory,
    initialize_database,
)
from fleet_notifier.infrastructure.email import NotificationEmailSender

from .delivery import EmailDeliveryWorker, EmailSender
from .scheduler import NotificationScheduler

logger = logging.getLogger(__name__)


@dataclass
class NotificationEngine:
    """Components constructed once at startup and shared by reference."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]
    delivery: EmailDeliveryWorker
    scheduler: NotificationScheduler

    def close(self, *, drain_timeout: float | None = 30.0) -> None:
        """Wait for pending emails, then release threads and connections."""

        self.delivery.drain(timeout=drain_timeout)
        self.delivery.shutdown(wait_for_pending=False)
        self.engine.dispose()


def build_notification_engine(
    settings: Settings,
    *,
    email_sender: EmailSender | None = None,
    engine: Engine | None = None,
    create_schema: bool = True,
) -> NotificationEngine:
    engine = engine or build_engine(settings)
    if create_schema:
        initialize_database(engine)
    session_factory = build_session_factory(engine)
    sender = email_sender or NotificationEmailSender(session_factory, settings)
    # An in-memory SQLite database lives on one shared connection.
    single_connection = isinstance(engine.pool, StaticPool)
    delivery = EmailDeliveryWorker(
        sender,
        session_factory,
        max_workers=1 if single_connection else settings.email_delivery_workers,
        tz_name=settings.app_timezone,
    )
    scheduler = NotificationScheduler(
        session_factory,
        settings,
        delivery,
        max_concurrent_jobs=1 if single_connection else None,
    )
    logger.debug("Notification engine ready")
    return NotificationEngine(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        delivery=delivery,
        scheduler=scheduler,
    )


__all__ = ["NotificationEngine", "build_notification_engine"]
