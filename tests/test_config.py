"""Tests for environment driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fleet_notifier.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite://")

    settings = Settings(_env_file=None)

    assert settings.maintenance_reminder_days == [30, 15, 7, 3]
    assert settings.license_expiry_reminder_days == [60, 30, 15, 7, 1]
    assert settings.incident_alert_days == [1]
    assert settings.notification_retention_days == 30
    assert settings.scheduler_enabled is False


def test_reminder_days_are_read_from_json_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("MAINTENANCE_REMINDER_DAYS", "[14, 2]")

    assert Settings(_env_file=None).maintenance_reminder_days == [14, 2]


def test_sendgrid_key_requires_sender() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, database_url="sqlite://", sendgrid_api_key="SG.fake")


def test_sendgrid_sender_must_be_an_address() -> None:
    with pytest.raises(ValidationError):
        Settings(
            _env_file=None,
            database_url="sqlite://",
            sendgrid_api_key="SG.fake",
            sendgrid_sender="fleetly",
        )


def test_retention_can_be_disabled() -> None:
    settings = Settings(_env_file=None, database_url="sqlite://", notification_retention_days=None)

    assert settings.notification_retention_days is None
