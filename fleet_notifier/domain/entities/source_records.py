"""Operational records scanned by the reminder jobs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

MAINTENANCE_STATUS_SCHEDULED = "scheduled"
MAINTENANCE_STATUS_IN_PROGRESS = "in_progress"
MAINTENANCE_STATUS_COMPLETED = "completed"
MAINTENANCE_STATUS_OVERDUE = "overdue"

DRIVER_STATUS_ACTIVE = "active"

INCIDENT_STATUS_RESOLVED = "resolved"


@dataclass
class Vehicle:
    id: int | None
    license_plate: str
    make: str | None = None
    model: str | None = None
    status: str = "active"


@dataclass
class MaintenanceRecord:
    """A maintenance task scheduled for a vehicle."""

    id: int | None
    vehicle_id: int
    service_type: str
    scheduled_date: date
    status: str = MAINTENANCE_STATUS_SCHEDULED
    description: str | None = None
    completed_date: date | None = None
    cost: float | None = None


@dataclass
class Driver:
    id: int | None
    name: str
    license_number: str
    license_expiry: date
    email: str | None = None
    status: str = DRIVER_STATUS_ACTIVE


@dataclass
class Incident:
    """An incident reported against a vehicle."""

    id: int | None
    incident_code: str
    vehicle_id: int
    type: str
    severity: str
    date: datetime
    status: str = "pending"
    driver_id: int | None = None
    description: str | None = None
    location: str | None = None


__all__ = [
    "MAINTENANCE_STATUS_SCHEDULED",
    "MAINTENANCE_STATUS_IN_PROGRESS",
    "MAINTENANCE_STATUS_COMPLETED",
    "MAINTENANCE_STATUS_OVERDUE",
    "DRIVER_STATUS_ACTIVE",
    "INCIDENT_STATUS_RESOLVED",
    "Vehicle",
    "MaintenanceRecord",
    "Driver",
    "Incident",
]
