"""Scan operational records whose due date falls inside a lookahead window."""

from __future__ import annotations

from datetime import date, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fleet_notifier.domain.entities import (
    CATEGORY_INCIDENT_ALERT,
    CATEGORY_LICENSE_EXPIRY,
    CATEGORY_MAINTENANCE_REMINDER,
    CandidateRecord,
)
from fleet_notifier.domain.errors import DataAccessError
from fleet_notifier.infrastructure.repositories import FleetRepository
from fleet_notifier.utils import days_between

MAINTENANCE_WINDOW_DAYS = 30
LICENSE_WINDOW_DAYS = 90
INCIDENT_LOOKBACK_DAYS = 7


def _check_window(window_days: int) -> None:
    if window_days < 0:
        raise ValueError("The scan window must be a non-negative number of days")


def scan_maintenance_candidates(
    session: Session, window_days: int = MAINTENANCE_WINDOW_DAYS, *, today: date
) -> list[CandidateRecord]:
    """Return pending maintenance due between ``today`` and ``today + window_days``."""

    _check_window(window_days)
    try:
        rows = FleetRepository(session).list_pending_maintenance(
            start=today, end=today + timedelta(days=window_days)
        )
    except SQLAlchemyError as exc:
        raise DataAccessError("Could not scan maintenance records") from exc

    candidates = []
    for record, vehicle in rows:
        plate = vehicle.license_plate if vehicle else f"#{record.vehicle_id}"
        candidates.append(
            CandidateRecord(
                category=CATEGORY_MAINTENANCE_REMINDER,
                entity_type="maintenance_record",
                entity_id=record.id,
                reference_date=record.scheduled_date,
                days_remaining=days_between(today, record.scheduled_date),
                subject=plate,
                details={
                    "vehicle_id": record.vehicle_id,
                    "vehicle_plate": plate,
                    "service_type": record.service_type,
                    "due_date": record.scheduled_date.isoformat(),
                },
            )
        )
    return candidates


def scan_license_candidates(
    session: Session, window_days: int = LICENSE_WINDOW_DAYS, *, today: date
) -> list[CandidateRecord]:
    """Return active drivers whose license expires within the window."""

    _check_window(window_days)
    try:
        drivers = FleetRepository(session).list_expiring_licenses(
            start=today, end=today + timedelta(days=window_days)
        )
    except SQLAlchemyError as exc:
        raise DataAccessError("Could not scan driver licenses") from exc

    return [
        CandidateRecord(
            category=CATEGORY_LICENSE_EXPIRY,
            entity_type="driver",
            entity_id=driver.id,
            reference_date=driver.license_expiry,
            days_remaining=days_between(today, driver.license_expiry),
            subject=driver.name,
            details={
                "driver_name": driver.name,
                "license_number": driver.license_number,
                "expiry_date": driver.license_expiry.isoformat(),
            },
        )
        for driver in drivers
    ]


def scan_incident_candidates(
    session: Session, lookback_days: int = INCIDENT_LOOKBACK_DAYS, *, today: date
) -> list[CandidateRecord]:
    """Return unresolved incidents reported in the last ``lookback_days`` days.

    ``days_remaining`` is zero or negative here; alerts match on ``days_elapsed``.
    """

    _check_window(lookback_days)
    try:
        rows = FleetRepository(session).list_open_incidents(
            start=today - timedelta(days=lookback_days), end=today
        )
    except SQLAlchemyError as exc:
        raise DataAccessError("Could not scan incidents") from exc

    candidates = []
    for incident, vehicle in rows:
        plate = vehicle.license_plate if vehicle else f"#{incident.vehicle_id}"
        candidates.append(
            CandidateRecord(
                category=CATEGORY_INCIDENT_ALERT,
                entity_type="incident",
                entity_id=incident.id,
                reference_date=incident.date.date(),
                days_remaining=days_between(today, incident.date),
                subject=incident.incident_code,
                details={
                    "incident_code": incident.incident_code,
                    "incident_type": incident.type,
                    "severity": incident.severity,
                    "vehicle_plate": plate,
                },
            )
        )
    return candidates


__all__ = [
    "INCIDENT_LOOKBACK_DAYS",
    "LICENSE_WINDOW_DAYS",
    "MAINTENANCE_WINDOW_DAYS",
    "scan_incident_candidates",
    "scan_license_candidates",
    "scan_maintenance_candidates",
]
