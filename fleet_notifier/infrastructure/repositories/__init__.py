"""Repository implementations for infrastructure layer."""

from .email_template_repository import EmailTemplateRepository
from .fleet_repository import FleetRepository
from .notification_repository import NotificationRepository
from .setting_repository import SettingRepository
from .user_repository import UserRepository

__all__ = [
    "EmailTemplateRepository",
    "FleetRepository",
    "NotificationRepository",
    "SettingRepository",
    "UserRepository",
]
