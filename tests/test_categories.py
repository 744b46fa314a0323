"""Tests for the category-specific urgency and content rules."""

from __future__ import annotations

from datetime import date

import pytest

from fleet_notifier.application.use_cases.notifications.categories import (
    INCIDENT,
    LICENSE_EXPIRY,
    MAINTENANCE,
    get_category,
    incident_priority,
    license_priority,
    maintenance_priority,
)
from fleet_notifier.domain.entities import CandidateRecord


@pytest.mark.parametrize(
    ("days", "expected"),
    [(30, "medium"), (7, "medium"), (4, "medium"), (3, "high"), (1, "high"), (0, "critical")],
)
def test_maintenance_priority(days, expected):
    assert maintenance_priority(days) == expected


@pytest.mark.parametrize(
    ("days", "expected"),
    [(60, "medium"), (31, "medium"), (30, "high"), (8, "high"), (7, "critical"), (1, "critical")],
)
def test_license_priority(days, expected):
    assert license_priority(days) == expected


@pytest.mark.parametrize(
    ("severity", "expected"),
    [("critical", "critical"), ("major", "high"), ("medium", "medium"), ("minor", "low"), (None, "medium")],
)
def test_incident_priority(severity, expected):
    assert incident_priority(severity) == expected


def test_maintenance_content_mentions_vehicle_and_due_date():
    candidate = CandidateRecord(
        category="maintenance_reminder",
        entity_type="maintenance_record",
        entity_id=4,
        reference_date=date(2026, 3, 17),
        days_remaining=7,
        subject="ABC-123",
        details={
            "vehicle_plate": "ABC-123",
            "service_type": "brake inspection",
            "due_date": "2026-03-17",
        },
    )

    title, message = MAINTENANCE.content(candidate)

    assert title == "Maintenance Reminder: ABC-123"
    assert "brake inspection" in message
    assert "2026-03-17 (in 7 days)" in message


def test_incident_category_matches_on_elapsed_days():
    candidate = CandidateRecord(
        category="incident_alert",
        entity_type="incident",
        entity_id=2,
        reference_date=date(2026, 3, 9),
        days_remaining=-1,
        subject="INC-001",
        details={"severity": "critical"},
    )

    assert INCIDENT.day_count(candidate) == 1
    assert LICENSE_EXPIRY.day_count(candidate) == -1
    assert INCIDENT.priority(candidate) == "critical"


def test_action_url_joins_base_url():
    assert LICENSE_EXPIRY.action_url("https://fleet.example.com/") == "https://fleet.example.com/drivers"


def test_unknown_category_has_no_job():
    with pytest.raises(ValueError):
        get_category("document_expiry")
