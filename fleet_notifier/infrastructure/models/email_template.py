"""SQLAlchemy model for localized email templates."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func

from fleet_notifier.infrastructure.database import Base


class EmailTemplateModel(Base):
    __tablename__ = "email_template"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False, index=True)
    language = Column(String(10), nullable=False, default="en")
    subject = Column(String(255), nullable=False)
    html_content = Column(Text, nullable=False)
    text_content = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
