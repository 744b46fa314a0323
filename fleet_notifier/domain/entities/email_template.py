"""Domain entity representing a stored email template."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class EmailTemplate:
    """Localized email layout for a notification type."""

    id: int | None
    type: str
    language: str
    subject: str
    html_content: str
    text_content: str
    is_active: bool = True
    created_at: datetime | None = None
