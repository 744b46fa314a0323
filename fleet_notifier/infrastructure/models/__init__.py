"""ORM models used by the application infrastructure."""

from .email_template import EmailTemplateModel
from .fleet import DriverModel, IncidentModel, MaintenanceRecordModel, VehicleModel
from .notification import NotificationModel
from .system_setting import SystemSettingModel
from .user import UserModel

__all__ = [
    "EmailTemplateModel",
    "DriverModel",
    "IncidentModel",
    "MaintenanceRecordModel",
    "VehicleModel",
    "NotificationModel",
    "SystemSettingModel",
    "UserModel",
]
