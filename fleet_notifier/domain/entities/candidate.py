"""Transient view of a source record that may deserve a reminder."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class CandidateRecord:
    """A source record joined with its remaining whole-day count."""

    category: str
    entity_type: str
    entity_id: int
    reference_date: date
    days_remaining: int
    subject: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def days_elapsed(self) -> int:
        """Days since ``reference_date``; negative while it lies in the future."""

        return -self.days_remaining


__all__ = ["CandidateRecord"]
