"""Resolve which users receive a notification category."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fleet_notifier.domain.entities import User
from fleet_notifier.domain.errors import DataAccessError
from fleet_notifier.infrastructure.repositories import UserRepository


def resolve_recipients(session: Session, category: str) -> frozenset[int]:
    """Return the ids of active users opted in to ``category``.

    An empty set simply means nobody is subscribed.
    """

    try:
        return frozenset(UserRepository(session).list_ids_opted_in(category))
    except SQLAlchemyError as exc:
        raise DataAccessError(f"Could not resolve recipients for {category}") from exc


def load_recipients(session: Session, recipient_ids: Iterable[int]) -> list[User]:
    """Return the users behind ``recipient_ids`` ordered by id."""

    ids = sorted(set(recipient_ids))
    if not ids:
        return []
    try:
        users = UserRepository(session).get_map_by_ids(ids)
    except SQLAlchemyError as exc:
        raise DataAccessError("Could not load recipient details") from exc
    return [users[user_id] for user_id in ids if user_id in users]


__all__ = ["load_recipients", "resolve_recipients"]
