"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.sql import expression

from fleet_notifier.infrastructure.database import Base


class UserModel(Base):
    """Database representation of the system user and alert preferences."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    role = Column(String(20), nullable=False, default="driver")
    language_preference = Column(String(10), nullable=False, default="en")
    is_active = Column(Boolean, nullable=False, default=True)
    deleted = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    email_notifications = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    maintenance_alerts = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    license_alerts = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    incident_alerts = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())
