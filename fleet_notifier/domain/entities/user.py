"""Domain entity representing a user that can receive notifications."""

from dataclasses import dataclass


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    role: str
    is_active: bool
    deleted: bool = False
    language_preference: str = "en"
    email_notifications: bool = True
    maintenance_alerts: bool = True
    license_alerts: bool = True
    incident_alerts: bool = True

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.role.lower() == "admin"

    def wants_email(self) -> bool:
        return self.email_notifications and bool(self.email)
