"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str | None = Field(
        default=None,
        description="Secret key used to verify the bearer tokens of the inbox API",
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending notification emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of notification emails",
        min_length=3,
    )
    email_from_name: str = Field(
        default="Fleetly System",
        description="Display name used as the sender of notification emails",
    )
    app_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the web client, used to build email action links",
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to decide what 'today' means for reminders",
    )
    maintenance_reminder_days: list[int] = Field(
        default_factory=lambda: [30, 15, 7, 3],
        description="Days before a scheduled maintenance when a reminder is created",
    )
    license_expiry_reminder_days: list[int] = Field(
        default_factory=lambda: [60, 30, 15, 7, 1],
        description="Days before a driver license expires when an alert is created",
    )
    incident_alert_days: list[int] = Field(
        default_factory=lambda: [1],
        description="Days after an incident was reported when an alert is created",
    )
    notification_retention_days: int | None = Field(
        default=30,
        description="Days a notification is kept before cleanup; null keeps it forever",
        gt=0,
    )
    email_delivery_workers: int = Field(
        default=4,
        description="Number of worker threads used to deliver notification emails",
        gt=0,
    )
    scheduler_enabled: bool = Field(
        default=False,
        description="Run the notification jobs periodically inside the API process",
    )
    scheduler_interval_seconds: int = Field(
        default=86400,
        description="Seconds between two scheduled notification runs",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
