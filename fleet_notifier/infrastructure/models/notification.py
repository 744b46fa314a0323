"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text
from sqlalchemy.sql import expression

from fleet_notifier.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_recipient_read", "recipient_id", "is_read"),
        Index("ix_notification_expires_at", "expires_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # Weak reference: recipients are not owned by the notification.
    recipient_id = Column(Integer, nullable=False, index=True)
    category = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    priority = Column(String(20), nullable=False, default="medium")
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    read_at = Column(DateTime(), nullable=True)
    email_sent = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    email_sent_at = Column(DateTime(), nullable=True)
    related_entity_type = Column(String(50), nullable=True)
    related_entity_id = Column(Integer, nullable=True)
    action_url = Column(String(500), nullable=True)
    expires_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False)


__all__ = ["NotificationModel"]
