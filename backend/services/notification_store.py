"""Notification persistence interface and the in-memory implementation."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from uuid import uuid4

from models.schemas.notification import NewNotification, Notification

logger = logging.getLogger(__name__)


class NotificationStore(ABC):
    """Append-only from the job search's point of view.

    Subclasses must implement:
        - create(): persist a new notification, assigning id and created_at
        - list_by_user(): a user's notifications, newest first
        - mark_read(): flip ``read`` to true
    """

    @abstractmethod
    async def create(self, notification: NewNotification) -> Notification:
        """Persist and return the stored notification."""

    @abstractmethod
    async def list_by_user(self, user_id: str) -> list[Notification]:
        """Newest first."""

    @abstractmethod
    async def mark_read(self, notification_id: str, user_id: str | None = None) -> bool:
        """Mark one notification read. False if it does not exist (or is not ``user_id``'s)."""


class InMemoryNotificationStore(NotificationStore):
    def __init__(self) -> None:
        self._rows: dict[str, Notification] = {}

    async def create(self, notification: NewNotification) -> Notification:
        stored = Notification(
            **notification.model_dump(),
            id=uuid4().hex,
            created_at=datetime.now(timezone.utc),
        )
        self._rows[stored.id] = stored
        logger.debug("Stored notification %s for user %s", stored.id, stored.user_id)
        return stored

    async def list_by_user(self, user_id: str) -> list[Notification]:
        # dicts keep insertion order, so reversing gives newest first on timestamp ties
        rows = [n for n in reversed(self._rows.values()) if n.user_id == user_id]
        return sorted(rows, key=lambda n: n.created_at, reverse=True)

    async def mark_read(self, notification_id: str, user_id: str | None = None) -> bool:
        current = self._rows.get(notification_id)
        if current is None or (user_id is not None and current.user_id != user_id):
            return False
        if not current.read:
            self._rows[notification_id] = current.model_copy(update={"read": True})
        return True


_store: NotificationStore | None = None


def get_store() -> NotificationStore:
    global _store
    if _store is None:
        _store = InMemoryNotificationStore()
    return _store
