"""Tests for the notification writer."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from conftest import add_user
from fleet_notifier.application.use_cases.notifications import NotificationWriter
from fleet_notifier.domain.entities import RelatedEntity
from fleet_notifier.domain.errors import PersistenceError
from fleet_notifier.infrastructure.repositories import NotificationRepository


@pytest.fixture
def writer(session):
    return NotificationWriter(session, tz_name="UTC")


@pytest.fixture
def owner(session):
    return add_user(session, "Ana Torres")


def _write(writer, recipient_id, **overrides):
    values = {
        "recipient_id": recipient_id,
        "category": "maintenance_reminder",
        "title": "Maintenance Reminder: ABC-123",
        "message": "Vehicle ABC-123 is due for oil change maintenance.",
        "priority": "medium",
        "related_entity": RelatedEntity("maintenance_record", 1),
        "expires_at": None,
    }
    values.update(overrides)
    return writer.write(**values)


def test_write_persists_a_new_unread_notification(writer, owner, session):
    notification = _write(writer, owner.id)

    stored = NotificationRepository(session).get(notification.id)
    assert stored is not None
    assert stored.read is False
    assert stored.email_sent is False
    assert stored.related_entity == RelatedEntity("maintenance_record", 1)
    assert stored.created_at is not None


def test_write_never_checks_for_existing_rows(writer, owner, session):
    first = _write(writer, owner.id)
    second = _write(writer, owner.id)

    assert first.id != second.id
    assert len(NotificationRepository(session).list_for_user(owner.id)) == 2


def test_write_rejects_unknown_category(writer, owner):
    with pytest.raises(ValueError):
        _write(writer, owner.id, category="fuel_alert")


def test_write_wraps_store_failures(writer, owner, monkeypatch):
    def broken_create(_notification):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(writer.repository, "create", broken_create)

    with pytest.raises(PersistenceError):
        _write(writer, owner.id)


def test_mark_read_is_idempotent(writer, owner, session):
    notification = _write(writer, owner.id)

    writer.mark_read(notification.id, owner.id)
    first_read_at = NotificationRepository(session).get(notification.id).read_at
    writer.mark_read(notification.id, owner.id)

    stored = NotificationRepository(session).get(notification.id)
    assert stored.read is True
    assert stored.read_at == first_read_at


def test_mark_read_ignores_other_users(writer, owner, session):
    intruder = add_user(session, "Luis Vega")
    notification = _write(writer, owner.id)

    writer.mark_read(notification.id, intruder.id)

    assert NotificationRepository(session).get(notification.id).read is False


def test_mark_all_read_only_touches_owner(writer, owner, session):
    other = add_user(session, "Luis Vega")
    _write(writer, owner.id)
    _write(writer, owner.id)
    foreign = _write(writer, other.id)

    writer.mark_all_read(owner.id)
    writer.mark_all_read(owner.id)

    repository = NotificationRepository(session)
    assert repository.count_unread(owner.id) == 0
    assert repository.get(foreign.id).read is False


def test_delete_expired_removes_only_past_non_null_expiry(writer, owner, session):
    now = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
    expired = _write(writer, owner.id, expires_at=now - timedelta(minutes=1))
    future = _write(writer, owner.id, expires_at=now + timedelta(days=1))
    permanent = _write(writer, owner.id, expires_at=None)

    deleted = writer.delete_expired(now=now)

    repository = NotificationRepository(session)
    assert deleted == 1
    assert repository.get(expired.id) is None
    assert repository.get(future.id) is not None
    assert repository.get(permanent.id) is not None
    assert writer.delete_expired(now=now) == 0


def test_record_email_sent_is_set_once(writer, owner, session):
    notification = _write(writer, owner.id)
    first_at = datetime(2026, 3, 10, 8, 0, tzinfo=timezone.utc)

    assert writer.record_email_sent(notification.id, first_at) is True
    assert writer.record_email_sent(notification.id, first_at + timedelta(hours=1)) is False

    stored = NotificationRepository(session).get(notification.id)
    assert stored.email_sent is True
    assert stored.email_sent_at == first_at
