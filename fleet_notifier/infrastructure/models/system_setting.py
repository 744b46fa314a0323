"""SQLAlchemy model for runtime-editable settings."""

from sqlalchemy import JSON, Column, DateTime, String, func

from fleet_notifier.infrastructure.database import Base


class SystemSettingModel(Base):
    """Key/value pair whose value is stored as JSON."""

    __tablename__ = "system_setting"

    key = Column(String(100), primary_key=True)
    value = Column(JSON, nullable=True)
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
