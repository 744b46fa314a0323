"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from fleet_notifier.domain.entities import User
from fleet_notifier.infrastructure.models import UserModel

# Per-category opt-in columns; categories without an entry reach every active user.
ALERT_FLAG_COLUMNS = {
    "maintenance_reminder": UserModel.maintenance_alerts,
    "license_expiry": UserModel.license_alerts,
    "incident_alert": UserModel.incident_alerts,
}


class UserRepository:
    """Provide read operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.id == user_id, UserModel.deleted.is_(False))
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_ids_opted_in(self, category: str) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.deleted.is_(False))
            .filter(UserModel.is_active.is_(True))
        )
        flag = ALERT_FLAG_COLUMNS.get(category)
        if flag is not None:
            query = query.filter(flag.is_(True))
        return [user_id for (user_id,) in query.order_by(UserModel.id).all()]

    def get_map_by_ids(
        self, user_ids: Sequence[int], *, include_deleted: bool = False
    ) -> dict[int, User]:
        if not user_ids:
            return {}

        unique_ids = {int(user_id) for user_id in user_ids}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        if not include_deleted:
            query = query.filter(UserModel.deleted.is_(False))
        return {model.id: self._to_entity(model) for model in query.all()}

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=model.role,
            is_active=model.is_active,
            deleted=model.deleted,
            language_preference=model.language_preference or "en",
            email_notifications=model.email_notifications,
            maintenance_alerts=model.maintenance_alerts,
            license_alerts=model.license_alerts,
            incident_alerts=model.incident_alerts,
        )

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email
        model.role = user.role
        model.language_preference = user.language_preference
        model.is_active = user.is_active
        model.deleted = user.deleted
        model.email_notifications = user.email_notifications
        model.maintenance_alerts = user.maintenance_alerts
        model.license_alerts = user.license_alerts
        model.incident_alerts = user.incident_alerts
