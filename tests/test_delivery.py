"""Tests for the background email delivery worker."""

from __future__ import annotations

import pytest

from conftest import FakeEmailSender, add_user
from fleet_notifier.application.use_cases.notifications import (
    EmailDeliveryWorker,
    NotificationWriter,
)
from fleet_notifier.domain.entities import Notification
from fleet_notifier.infrastructure.repositories import NotificationRepository


def _notification(session, user):
    return NotificationWriter(session, tz_name="UTC").write(
        user.id,
        "incident_alert",
        "Incident Alert: INC-001",
        "Incident INC-001 (accident) is still pending.",
        "high",
        action_url="https://fleet.example.com/incidents",
    )


@pytest.fixture
def make_worker(session_factory):
    workers = []

    def _make(sender):
        worker = EmailDeliveryWorker(sender, session_factory, tz_name="UTC")
        workers.append(worker)
        return worker

    yield _make
    for worker in workers:
        worker.shutdown()


def test_successful_delivery_is_recorded(make_worker, session, email_sender):
    user = add_user(session, language_preference="es")
    notification = _notification(session, user)
    worker = make_worker(email_sender)

    outcome = worker.submit(notification, user).result(timeout=10)

    assert outcome.delivered is True
    assert outcome.recorded is True
    assert email_sender.sent[0]["language"] == "es"
    assert email_sender.sent[0]["type"] == "incident_alert"
    session.expire_all()
    assert NotificationRepository(session).get(notification.id).email_sent is True
    assert worker.pending_count == 0


@pytest.mark.parametrize("mode", ["failing", "raising"])
def test_failed_delivery_leaves_flag_unset(make_worker, session, mode):
    user = add_user(session)
    notification = _notification(session, user)
    worker = make_worker(FakeEmailSender(**{mode: {user.email}}))

    outcome = worker.submit(notification, user).result(timeout=10)

    assert outcome.delivered is False
    assert outcome.error
    session.expire_all()
    assert NotificationRepository(session).get(notification.id).email_sent is False


def test_unsaved_notifications_are_rejected(make_worker, session, email_sender):
    user = add_user(session)
    draft = Notification(
        id=None,
        recipient_id=user.id,
        category="system",
        title="Draft",
        message="Not stored",
        priority="low",
    )

    with pytest.raises(ValueError):
        make_worker(email_sender).submit(draft, user)


def test_drain_returns_outcomes_of_pending_deliveries(make_worker, session, email_sender):
    user = add_user(session)
    worker = make_worker(email_sender)
    futures = [worker.submit(_notification(session, user), user) for _ in range(3)]

    worker.drain(timeout=10)

    assert all(future.done() for future in futures)
    assert len(email_sender.sent) == 3
