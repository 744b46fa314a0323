"""Endpoints for the notification inbox and manual runs."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from fleet_notifier.application.use_cases.notifications import (
    NotificationEngine,
    NotificationWriter,
)
from fleet_notifier.domain.entities import Notification, SchedulerRunReport, User
from fleet_notifier.infrastructure.repositories import NotificationRepository
from fleet_notifier.interfaces.api.dependencies import (
    get_current_active_user,
    get_db,
    get_engine,
    require_admin,
)
from fleet_notifier.interfaces.api.schemas import (
    JobResultRead,
    NotificationMarkReadRequest,
    NotificationRead,
    SchedulerRunRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        recipient_id=notification.recipient_id,
        category=notification.category,
        title=notification.title,
        message=notification.message,
        priority=notification.priority,
        read=notification.read,
        read_at=notification.read_at,
        email_sent=notification.email_sent,
        email_sent_at=notification.email_sent_at,
        related_entity_type=notification.related_entity_type,
        related_entity_id=notification.related_entity_id,
        action_url=notification.action_url,
        expires_at=notification.expires_at,
        created_at=notification.created_at,
    )


def _report_to_schema(report: SchedulerRunReport) -> SchedulerRunRead:
    return SchedulerRunRead(
        started_at=report.started_at,
        finished_at=report.finished_at,
        succeeded=report.succeeded,
        results=[
            JobResultRead(
                job=result.job,
                succeeded=result.succeeded,
                detail=result.detail,
                error=result.error,
                started_at=result.started_at,
                finished_at=result.finished_at,
            )
            for result in report.results
        ],
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = False,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    engine: NotificationEngine = Depends(get_engine),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = NotificationRepository(
        db, tz_name=engine.settings.app_timezone
    ).list_for_user(current_user.id, unread_only=unread_only, limit=limit)
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountRead:
    return UnreadCountRead(unread=NotificationRepository(db).count_unread(current_user.id))


@router.post("/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    engine: NotificationEngine = Depends(get_engine),
    current_user: User = Depends(get_current_active_user),
) -> None:
    """Mark the given notifications of the authenticated user as read."""

    NotificationWriter(db, tz_name=engine.settings.app_timezone).mark_many_read(
        payload.unique_ids(), current_user.id
    )


@router.post("/read-all", status_code=status.HTTP_204_NO_CONTENT)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    engine: NotificationEngine = Depends(get_engine),
    current_user: User = Depends(get_current_active_user),
) -> None:
    NotificationWriter(db, tz_name=engine.settings.app_timezone).mark_all_read(current_user.id)


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    engine: NotificationEngine = Depends(get_engine),
    current_user: User = Depends(get_current_active_user),
) -> None:
    """Mark a single notification as read; other users' ids are ignored."""

    NotificationWriter(db, tz_name=engine.settings.app_timezone).mark_read(
        notification_id, current_user.id
    )


@router.post("/run", response_model=SchedulerRunRead)
async def run_notifications(
    engine: NotificationEngine = Depends(get_engine),
    _admin: User = Depends(require_admin),
) -> SchedulerRunRead:
    """Trigger a notification run immediately."""

    if engine.scheduler.is_running:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A notification run is already in progress",
        )
    report = await engine.scheduler.run_scheduled_notifications()
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A notification run is already in progress",
        )
    return _report_to_schema(report)
