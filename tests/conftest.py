"""Shared fixtures for the notification engine tests."""

from __future__ import annotations

import os
import sys
import threading
from datetime import date, datetime
from pathlib import Path

import pytest

# Ensure the project root (which contains ``main`` and ``fleet_notifier``) is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")

from fleet_notifier.config import Settings
from fleet_notifier.domain.entities import Driver, Incident, MaintenanceRecord, User, Vehicle
from fleet_notifier.infrastructure.database import (
    build_engine,
    build_session_factory,
    initialize_database,
)
from fleet_notifier.infrastructure.repositories import FleetRepository, UserRepository

TODAY = date(2026, 3, 10)


class FakeEmailSender:
    """Records every email; addresses in ``failing`` report a failure."""

    def __init__(self, *, failing=(), raising=()) -> None:
        self.failing = set(failing)
        self.raising = set(raising)
        self.sent: list[dict] = []
        self._lock = threading.Lock()

    def send_notification_email(
        self,
        to,
        name,
        notification_type,
        title,
        message,
        action_url=None,
        language=None,
    ) -> bool:
        if to in self.raising:
            raise ConnectionError("SMTP relay unreachable")
        if to in self.failing:
            return False
        with self._lock:
            self.sent.append(
                {
                    "to": to,
                    "name": name,
                    "type": notification_type,
                    "title": title,
                    "message": message,
                    "action_url": action_url,
                    "language": language,
                }
            )
        return True


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'notifications.db'}",
        secret_key="test-secret",
        app_timezone="UTC",
        app_url="https://fleet.example.com",
        maintenance_reminder_days=[30, 15, 7, 3],
        license_expiry_reminder_days=[60, 30, 15, 7, 1],
        incident_alert_days=[1],
        notification_retention_days=30,
    )


@pytest.fixture
def db_engine(settings):
    engine = build_engine(settings)
    initialize_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest.fixture
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


def add_user(session, name="Ana Torres", email=None, **overrides) -> User:
    values = {
        "id": None,
        "name": name,
        "email": email or f"{name.split()[0].lower()}@example.com",
        "role": "manager",
        "is_active": True,
    }
    values.update(overrides)
    return UserRepository(session).create(User(**values))


def add_vehicle(session, plate="ABC-123") -> Vehicle:
    return FleetRepository(session).add_vehicle(
        Vehicle(id=None, license_plate=plate, make="Ford", model="Transit")
    )


def add_maintenance(session, vehicle, scheduled_date, **overrides) -> MaintenanceRecord:
    values = {
        "id": None,
        "vehicle_id": vehicle.id,
        "service_type": "oil change",
        "scheduled_date": scheduled_date,
    }
    values.update(overrides)
    return FleetRepository(session).add_maintenance(MaintenanceRecord(**values))


def add_driver(session, license_expiry, name="Sarah Johnson", **overrides) -> Driver:
    values = {
        "id": None,
        "name": name,
        "license_number": f"LIC-{name[:3].upper()}",
        "license_expiry": license_expiry,
    }
    values.update(overrides)
    return FleetRepository(session).add_driver(Driver(**values))


def add_incident(session, vehicle, reported_at: datetime, code="INC-001", **overrides) -> Incident:
    values = {
        "id": None,
        "incident_code": code,
        "vehicle_id": vehicle.id,
        "type": "accident",
        "severity": "major",
        "date": reported_at,
    }
    values.update(overrides)
    return FleetRepository(session).add_incident(Incident(**values))
