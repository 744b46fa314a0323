"""Per-category rules used by the dispatch pipeline."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from fleet_notifier.domain.entities import (
    CATEGORY_INCIDENT_ALERT,
    CATEGORY_LICENSE_EXPIRY,
    CATEGORY_MAINTENANCE_REMINDER,
    PRIORITY_CRITICAL,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    CandidateRecord,
)

from .candidates import (
    INCIDENT_LOOKBACK_DAYS,
    LICENSE_WINDOW_DAYS,
    MAINTENANCE_WINDOW_DAYS,
    scan_incident_candidates,
    scan_license_candidates,
    scan_maintenance_candidates,
)

Scanner = Callable[..., list[CandidateRecord]]


def maintenance_priority(days_remaining: int) -> str:
    if days_remaining <= 0:
        return PRIORITY_CRITICAL
    if days_remaining <= 3:
        return PRIORITY_HIGH
    return PRIORITY_MEDIUM


def license_priority(days_remaining: int) -> str:
    if days_remaining <= 7:
        return PRIORITY_CRITICAL
    if days_remaining <= 30:
        return PRIORITY_HIGH
    return PRIORITY_MEDIUM


_SEVERITY_PRIORITIES = {
    "critical": PRIORITY_CRITICAL,
    "major": PRIORITY_HIGH,
    "medium": PRIORITY_MEDIUM,
    "minor": PRIORITY_LOW,
}


def incident_priority(severity: str | None) -> str:
    return _SEVERITY_PRIORITIES.get((severity or "").lower(), PRIORITY_MEDIUM)


def _in_days(days: int) -> str:
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    return f"in {days} days"


def _maintenance_content(candidate: CandidateRecord) -> tuple[str, str]:
    details = candidate.details
    title = f"Maintenance Reminder: {details['vehicle_plate']}"
    message = (
        f"Vehicle {details['vehicle_plate']} is due for {details['service_type']} "
        f"maintenance on {details['due_date']} ({_in_days(candidate.days_remaining)})."
    )
    return title, message


def _license_content(candidate: CandidateRecord) -> tuple[str, str]:
    details = candidate.details
    title = f"License Expiry Alert: {details['driver_name']}"
    message = (
        f"Driver {details['driver_name']}'s license will expire on "
        f"{details['expiry_date']} ({_in_days(candidate.days_remaining)}). "
        "Please renew it before it lapses."
    )
    return title, message


def _incident_content(candidate: CandidateRecord) -> tuple[str, str]:
    details = candidate.details
    title = f"Incident Alert: {details['incident_code']}"
    message = (
        f"A {details['severity']} {details['incident_type']} incident was reported "
        f"for vehicle {details['vehicle_plate']} on {candidate.reference_date.isoformat()} "
        "and is still open."
    )
    return title, message


@dataclass(frozen=True)
class ReminderCategory:
    """How one notification category is scanned, matched and rendered."""

    name: str
    job_name: str
    window_days: int
    scanner: Scanner
    content: Callable[[CandidateRecord], tuple[str, str]]
    priority: Callable[[CandidateRecord], str]
    action_path: str
    counts_elapsed_days: bool = False

    def scan(self, session: Session, *, today: date) -> list[CandidateRecord]:
        return self.scanner(session, self.window_days, today=today)

    def day_count(self, candidate: CandidateRecord) -> int:
        """Value compared against the threshold set."""

        if self.counts_elapsed_days:
            return candidate.days_elapsed
        return candidate.days_remaining

    def action_url(self, app_url: str) -> str:
        return app_url.rstrip("/") + self.action_path


MAINTENANCE = ReminderCategory(
    name=CATEGORY_MAINTENANCE_REMINDER,
    job_name="maintenance_reminders",
    window_days=MAINTENANCE_WINDOW_DAYS,
    scanner=scan_maintenance_candidates,
    content=_maintenance_content,
    priority=lambda candidate: maintenance_priority(candidate.days_remaining),
    action_path="/maintenance",
)

LICENSE_EXPIRY = ReminderCategory(
    name=CATEGORY_LICENSE_EXPIRY,
    job_name="license_expiry_alerts",
    window_days=LICENSE_WINDOW_DAYS,
    scanner=scan_license_candidates,
    content=_license_content,
    priority=lambda candidate: license_priority(candidate.days_remaining),
    action_path="/drivers",
)

INCIDENT = ReminderCategory(
    name=CATEGORY_INCIDENT_ALERT,
    job_name="incident_alerts",
    window_days=INCIDENT_LOOKBACK_DAYS,
    scanner=scan_incident_candidates,
    content=_incident_content,
    priority=lambda candidate: incident_priority(candidate.details.get("severity")),
    action_path="/incidents",
    counts_elapsed_days=True,
)

REMINDER_CATEGORIES = {
    category.name: category for category in (MAINTENANCE, LICENSE_EXPIRY, INCIDENT)
}


def get_category(name: str) -> ReminderCategory:
    try:
        return REMINDER_CATEGORIES[name]
    except KeyError:
        raise ValueError(f"No reminder job exists for category {name!r}") from None


__all__ = [
    "INCIDENT",
    "LICENSE_EXPIRY",
    "MAINTENANCE",
    "REMINDER_CATEGORIES",
    "ReminderCategory",
    "get_category",
    "incident_priority",
    "license_priority",
    "maintenance_priority",
]
