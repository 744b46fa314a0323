"""Value objects describing the outcome of notification jobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class DispatchOutcome:
    """Counters collected while dispatching one category."""

    category: str
    candidates_scanned: int = 0
    candidates_matched: int = 0
    notifications_created: int = 0
    notifications_failed: int = 0
    emails_queued: int = 0
    notification_ids: list[int] = field(default_factory=list)


@dataclass
class JobResult:
    """Explicit success/failure channel for one scheduled job."""

    job: str
    succeeded: bool
    detail: Any = None
    error: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @classmethod
    def success(cls, job: str, detail: Any = None, **timestamps: datetime) -> "JobResult":
        return cls(job=job, succeeded=True, detail=detail, **timestamps)

    @classmethod
    def failure(cls, job: str, error: BaseException, **timestamps: datetime) -> "JobResult":
        return cls(
            job=job,
            succeeded=False,
            error=f"{type(error).__name__}: {error}",
            **timestamps,
        )


@dataclass
class SchedulerRunReport:
    """Aggregated results of one scheduler tick."""

    started_at: datetime
    finished_at: datetime | None = None
    results: list[JobResult] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return all(result.succeeded for result in self.results)

    @property
    def failed_jobs(self) -> list[str]:
        return [result.job for result in self.results if not result.succeeded]

    def result_for(self, job: str) -> JobResult | None:
        for result in self.results:
            if result.job == job:
                return result
        return None


__all__ = ["DispatchOutcome", "JobResult", "SchedulerRunReport"]
