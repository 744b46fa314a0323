"""Persistence helpers for runtime-editable settings."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from fleet_notifier.infrastructure.models import SystemSettingModel


class SettingRepository:
    """Read and write JSON values stored under a string key."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_value(self, key: str, default: Any = None) -> Any:
        model = self.session.get(SystemSettingModel, key)
        if model is None:
            return default
        return model.value

    def set_value(self, key: str, value: Any) -> None:
        model = self.session.get(SystemSettingModel, key)
        if model is None:
            model = SystemSettingModel(key=key)
        model.value = value
        self.session.add(model)
        self.session.commit()


__all__ = ["SettingRepository"]
