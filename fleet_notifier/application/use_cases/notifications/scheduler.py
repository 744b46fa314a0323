"""Run all notification jobs for one scheduler tick."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from datetime import date
from functools import partial
from typing import Any

import anyio
from anyio import to_thread

from fleet_notifier.config import Settings
from fleet_notifier.domain.entities import JobResult, SchedulerRunReport
from fleet_notifier.infrastructure.database import SessionFactory, session_scope
from fleet_notifier.utils import now_in_timezone

from .categories import INCIDENT, LICENSE_EXPIRY, MAINTENANCE, ReminderCategory
from .delivery import EmailDeliveryWorker
from .pipeline import DispatchPipeline
from .writer import NotificationWriter

logger = logging.getLogger(__name__)

CLEANUP_JOB = "expired_notification_cleanup"


class SchedulerState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class NotificationScheduler:
    """Launch the reminder and cleanup jobs concurrently.

    A trigger received while a run is in progress is ignored. Each job runs in
    a worker thread with its own session and reports a :class:`JobResult`; a
    failing job never cancels the others and nothing is raised to the caller.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        settings: Settings,
        delivery: EmailDeliveryWorker | None = None,
        *,
        categories: tuple[ReminderCategory, ...] = (MAINTENANCE, LICENSE_EXPIRY, INCIDENT),
        max_concurrent_jobs: int | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings
        self._pipeline = DispatchPipeline(session_factory, settings, delivery)
        self._categories = categories
        self._max_concurrent_jobs = max_concurrent_jobs
        self._state = SchedulerState.IDLE
        self.last_report: SchedulerRunReport | None = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SchedulerState.RUNNING

    async def run_scheduled_notifications(
        self, *, today: date | None = None
    ) -> SchedulerRunReport | None:
        """Run every job once; returns ``None`` when a run is already active."""

        if self._state is SchedulerState.RUNNING:
            logger.warning("Notification run already in progress; trigger ignored")
            return None

        self._state = SchedulerState.RUNNING
        report = SchedulerRunReport(started_at=self._now())
        logger.info("Notification run started")
        try:
            jobs: list[tuple[str, Callable[[], Any]]] = [
                (category.job_name, partial(self._pipeline.run, category, today=today))
                for category in self._categories
            ]
            jobs.append((CLEANUP_JOB, self._cleanup_expired))

            results: dict[str, JobResult] = {}
            limiter = (
                anyio.CapacityLimiter(self._max_concurrent_jobs)
                if self._max_concurrent_jobs
                else None
            )
            async with anyio.create_task_group() as task_group:
                for name, job in jobs:
                    task_group.start_soon(self._run_job, name, job, results, limiter)

            report.results = [results[name] for name, _ in jobs]
        finally:
            report.finished_at = self._now()
            self._state = SchedulerState.IDLE

        self.last_report = report
        if report.succeeded:
            logger.info("Notification run finished; all %s jobs succeeded", len(report.results))
        else:
            logger.warning(
                "Notification run finished with failed jobs: %s",
                ", ".join(report.failed_jobs),
            )
        return report

    async def _run_job(
        self,
        name: str,
        job: Callable[[], Any],
        results: dict[str, JobResult],
        limiter: anyio.CapacityLimiter | None = None,
    ) -> None:
        started_at = self._now()
        try:
            detail = await to_thread.run_sync(job, limiter=limiter)
        except Exception as exc:  # job boundary: report, never propagate
            logger.exception("Notification job %s failed", name)
            results[name] = JobResult.failure(
                name, exc, started_at=started_at, finished_at=self._now()
            )
        else:
            results[name] = JobResult.success(
                name, detail, started_at=started_at, finished_at=self._now()
            )

    def _cleanup_expired(self) -> int:
        with session_scope(self._session_factory) as session:
            writer = NotificationWriter(session, tz_name=self._settings.app_timezone)
            return writer.delete_expired()

    def _now(self):
        return now_in_timezone(self._settings.app_timezone)


__all__ = ["CLEANUP_JOB", "NotificationScheduler", "SchedulerState"]
