"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from social_notifications.domain.entities import Notification

from .manager import NotificationConnectionManager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Serialize notifications and schedule their delivery.

    Fan-out runs on worker threads, so delivery is handed to the event loop
    that owns the websockets. Without a bound loop nothing is sent.
    """

    def __init__(
        self,
        manager: NotificationConnectionManager,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._manager = manager
        self._loop = loop

    def bind_loop(self, loop: asyncio.AbstractEventLoop | None) -> None:
        self._loop = loop

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its recipient."""

        if not self._manager.is_connected(notification.recipient_id):
            return
        message = {"type": "notification", "data": serialize_notification(notification)}
        coroutine = self._manager.send_to_user(notification.recipient_id, message)
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is not None:
            running.create_task(coroutine)
            return
        if self._loop is None or self._loop.is_closed():
            coroutine.close()
            logger.debug("No event loop bound; skipping realtime delivery")
            return
        asyncio.run_coroutine_threadsafe(coroutine, self._loop)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "triggering_user_id": notification.triggering_user_id,
        "type": notification.type.value,
        "entity_id": notification.entity_id,
        "content": notification.content,
        "resource_url": notification.resource_url,
        "is_read": notification.is_read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
        "updated_at": notification.updated_at.isoformat()
        if notification.updated_at
        else None,
    }


__all__ = ["NotificationPublisher", "serialize_notification"]
