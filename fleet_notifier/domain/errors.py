"""Errors raised by the notification engine."""


class NotificationEngineError(Exception):
    """Base class for failures inside the notification engine."""


class DataAccessError(NotificationEngineError):
    """The record store could not be queried; aborts the current job."""


class PersistenceError(NotificationEngineError):
    """A single notification row could not be written."""


class DeliveryError(NotificationEngineError):
    """The email collaborator failed to deliver a notification."""


__all__ = [
    "NotificationEngineError",
    "DataAccessError",
    "PersistenceError",
    "DeliveryError",
]
