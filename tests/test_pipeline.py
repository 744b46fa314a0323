"""Tests for the per-category dispatch pipeline."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from conftest import FakeEmailSender, add_driver, add_maintenance, add_user, add_vehicle
from fleet_notifier.application.use_cases.notifications import (
    DispatchPipeline,
    EmailDeliveryWorker,
)
from fleet_notifier.domain.errors import DataAccessError
from fleet_notifier.infrastructure.repositories import (
    FleetRepository,
    NotificationRepository,
    SettingRepository,
)


@pytest.fixture
def delivery(session_factory, email_sender):
    worker = EmailDeliveryWorker(email_sender, session_factory, max_workers=2, tz_name="UTC")
    yield worker
    worker.shutdown()


@pytest.fixture
def pipeline(session_factory, settings, delivery):
    return DispatchPipeline(session_factory, settings, delivery)


def _stored(session, user):
    session.expire_all()
    return NotificationRepository(session, tz_name="UTC").list_for_user(user.id, limit=None)


def test_maintenance_due_in_seven_days_notifies_every_manager(
    pipeline, delivery, session, today, email_sender
):
    ana = add_user(session, "Ana Torres")
    luis = add_user(session, "Luis Vega")
    record = add_maintenance(session, add_vehicle(session), today + timedelta(days=7))

    outcome = pipeline.run("maintenance_reminder", today=today)
    delivery.drain(timeout=10)

    assert outcome.notifications_created == 2
    assert outcome.emails_queued == 2
    for user in (ana, luis):
        [notification] = _stored(session, user)
        assert notification.priority == "medium"
        assert notification.title == "Maintenance Reminder: ABC-123"
        assert notification.related_entity_id == record.id
        assert notification.action_url == "https://fleet.example.com/maintenance"
        assert notification.email_sent is True
    assert sorted(mail["to"] for mail in email_sender.sent) == [
        "ana@example.com",
        "luis@example.com",
    ]


def test_off_threshold_days_create_nothing(pipeline, session, today):
    ana = add_user(session)
    add_maintenance(session, add_vehicle(session), today + timedelta(days=8))

    outcome = pipeline.run("maintenance_reminder", today=today)

    assert outcome.candidates_scanned == 1
    assert outcome.candidates_matched == 0
    assert _stored(session, ana) == []


def test_license_expiring_in_a_week_is_critical(pipeline, session, today):
    ana = add_user(session)
    add_driver(session, today + timedelta(days=7))

    pipeline.run("license_expiry", today=today)

    [notification] = _stored(session, ana)
    assert notification.priority == "critical"
    assert notification.title == "License Expiry Alert: Sarah Johnson"


def test_users_with_category_alerts_off_are_skipped(pipeline, session, today):
    ana = add_user(session)
    muted = add_user(session, "Luis Vega", license_alerts=False)
    add_driver(session, today + timedelta(days=30))

    pipeline.run("license_expiry", today=today)

    assert len(_stored(session, ana)) == 1
    assert _stored(session, muted) == []


def test_one_failed_write_does_not_stop_the_others(
    pipeline, session, today, monkeypatch
):
    ana = add_user(session)
    broken = add_user(session, "Luis Vega")
    add_maintenance(session, add_vehicle(session), today + timedelta(days=3))
    original_create = NotificationRepository.create

    def flaky_create(self, notification):
        if notification.recipient_id == broken.id:
            raise OperationalError("INSERT", {}, Exception("database is locked"))
        return original_create(self, notification)

    monkeypatch.setattr(NotificationRepository, "create", flaky_create)

    outcome = pipeline.run("maintenance_reminder", today=today)

    assert outcome.notifications_created == 1
    assert outcome.notifications_failed == 1
    [notification] = _stored(session, ana)
    assert notification.priority == "high"


def test_scan_failure_aborts_before_any_write(pipeline, session, today, monkeypatch):
    ana = add_user(session)
    add_maintenance(session, add_vehicle(session), today + timedelta(days=7))

    def unavailable(self, start, end):
        raise OperationalError("SELECT", {}, Exception("no such table"))

    monkeypatch.setattr(FleetRepository, "list_pending_maintenance", unavailable)

    with pytest.raises(DataAccessError):
        pipeline.run("maintenance_reminder", today=today)
    assert _stored(session, ana) == []


def test_email_failures_do_not_affect_stored_notifications(
    session_factory, settings, session, today
):
    sender = FakeEmailSender(failing={"ana@example.com"}, raising={"luis@example.com"})
    worker = EmailDeliveryWorker(sender, session_factory, tz_name="UTC")
    ana = add_user(session)
    luis = add_user(session, "Luis Vega")
    add_maintenance(session, add_vehicle(session), today + timedelta(days=15))

    try:
        outcome = DispatchPipeline(session_factory, settings, worker).run(
            "maintenance_reminder", today=today
        )
        worker.drain(timeout=10)
    finally:
        worker.shutdown()

    assert outcome.notifications_created == 2
    assert sender.sent == []
    for user in (ana, luis):
        [notification] = _stored(session, user)
        assert notification.email_sent is False


def test_failed_email_does_not_affect_other_recipients(session_factory, settings, session, today):
    sender = FakeEmailSender(failing={"ana@example.com"})
    worker = EmailDeliveryWorker(sender, session_factory, tz_name="UTC")
    ana = add_user(session)
    luis = add_user(session, "Luis Vega")
    add_maintenance(session, add_vehicle(session), today + timedelta(days=15))

    try:
        outcome = DispatchPipeline(session_factory, settings, worker).run(
            "maintenance_reminder", today=today
        )
        worker.drain(timeout=10)
    finally:
        worker.shutdown()

    assert outcome.notifications_created == 2
    [failed] = _stored(session, ana)
    [delivered] = _stored(session, luis)
    assert failed.email_sent is False
    assert delivered.email_sent is True
    assert [mail["to"] for mail in sender.sent] == ["luis@example.com"]


def test_no_email_for_users_who_opted_out(pipeline, delivery, session, today, email_sender):
    ana = add_user(session, email_notifications=False)
    add_maintenance(session, add_vehicle(session), today + timedelta(days=30))

    outcome = pipeline.run("maintenance_reminder", today=today)
    delivery.drain(timeout=10)

    assert outcome.emails_queued == 0
    assert email_sender.sent == []
    assert len(_stored(session, ana)) == 1


def test_second_run_on_the_same_day_duplicates(pipeline, delivery, session, today):
    ana = add_user(session)
    add_maintenance(session, add_vehicle(session), today + timedelta(days=7))

    pipeline.run("maintenance_reminder", today=today)
    pipeline.run("maintenance_reminder", today=today)
    delivery.drain(timeout=10)

    assert len(_stored(session, ana)) == 2


def test_empty_threshold_setting_disables_category(pipeline, session, today):
    ana = add_user(session)
    add_maintenance(session, add_vehicle(session), today + timedelta(days=7))
    SettingRepository(session).set_value("reminder_days.maintenance_reminder", [])

    outcome = pipeline.run("maintenance_reminder", today=today)

    assert outcome.candidates_scanned == 0
    assert _stored(session, ana) == []


def test_notifications_expire_after_retention(pipeline, session, today):
    ana = add_user(session)
    add_maintenance(session, add_vehicle(session), today + timedelta(days=7))

    pipeline.run("maintenance_reminder", today=today)

    [notification] = _stored(session, ana)
    lifetime = notification.expires_at - notification.created_at
    assert abs(lifetime - timedelta(days=30)) < timedelta(seconds=5)


def test_notifications_never_expire_without_retention(session_factory, settings, session, today):
    ana = add_user(session)
    add_maintenance(session, add_vehicle(session), today + timedelta(days=7))
    no_retention = settings.model_copy(update={"notification_retention_days": None})

    DispatchPipeline(session_factory, no_retention).run("maintenance_reminder", today=today)

    [notification] = _stored(session, ana)
    assert notification.expires_at is None
