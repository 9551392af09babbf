"""Use cases behind the notification service HTTP surface."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from social_notifications.domain.entities import Notification, NotificationType
from social_notifications.domain.errors import ConflictError, InvalidOperationError
from social_notifications.infrastructure.database import Store
from social_notifications.infrastructure.notifications import NotificationPublisher
from social_notifications.infrastructure.repositories import NotificationRepository

from .deadlines import OperationTimeouts, request_operation

logger = logging.getLogger(__name__)


class NotificationService:
    """CRUD over notification records for their recipients."""

    def __init__(
        self,
        store: Store,
        *,
        timeouts: OperationTimeouts | None = None,
        publisher: NotificationPublisher | None = None,
    ) -> None:
        self.store = store
        self.timeouts = timeouts or OperationTimeouts()
        self.publisher = publisher

    def create(self, notification: Notification) -> Notification:
        """Store ``notification`` with server-assigned id and timestamps.

        ``is_read`` is forced to ``False`` and caller-supplied timestamps are
        ignored. Every call inserts a new row, except that a like, follow or
        new-post event which is already stored returns the existing row.
        """

        if notification.recipient_id <= 0:
            raise InvalidOperationError("recipient id must be a positive integer")
        if notification.is_self_notification():
            raise InvalidOperationError("a user cannot be notified about their own action")

        draft = Notification(
            id=None,
            recipient_id=notification.recipient_id,
            triggering_user_id=notification.triggering_user_id,
            type=NotificationType(notification.type),
            entity_id=notification.entity_id,
            content=notification.content,
            resource_url=notification.resource_url,
        )
        with request_operation(
            self.store, self.timeouts.single_row, "create notification"
        ) as session:
            repository = NotificationRepository(session)
            created = repository.create(draft)
            if created is None:
                existing = repository.get_by_event(
                    recipient_id=draft.recipient_id,
                    triggering_user_id=draft.triggering_user_id,
                    notification_type=draft.type,
                    entity_id=draft.entity_id,
                )
                if existing is None:
                    raise ConflictError(
                        "notification could not be stored",
                        detail=f"{draft.type.value} event for recipient {draft.recipient_id}",
                    )
                logger.info(
                    "Notification for recipient %s already exists as %s",
                    draft.recipient_id,
                    existing.id,
                )
                return existing

        self._publish(created)
        return created

    def _publish(self, notification: Notification) -> None:
        if self.publisher is None:
            return
        try:
            self.publisher.dispatch(notification)
        except Exception:
            logger.exception("Realtime delivery of notification %s failed", notification.id)

    def list_by_user(self, user_id: int) -> Sequence[Notification]:
        """Return every notification of ``user_id``, newest first."""

        with request_operation(
            self.store, self.timeouts.listing, "list notifications"
        ) as session:
            return NotificationRepository(session).list_for_user(user_id)

    def list_unread(self, user_id: int, *, limit: int | None = 50) -> Sequence[Notification]:
        with request_operation(
            self.store, self.timeouts.listing, "list unread notifications"
        ) as session:
            return NotificationRepository(session).list_unread_for_user(user_id, limit=limit)

    def mark_as_read(self, notification_id: int) -> None:
        """Flag one notification as read; unknown ids are not an error."""

        with request_operation(
            self.store, self.timeouts.single_row, "mark notification read"
        ) as session:
            NotificationRepository(session).mark_as_read(notification_id)

    def mark_many_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        with request_operation(
            self.store, self.timeouts.listing, "acknowledge notifications"
        ) as session:
            return NotificationRepository(session).mark_many_as_read(
                notification_ids, user_id=user_id
            )

    def mark_all_as_read(self, user_id: int) -> int:
        """Flag every unread notification of ``user_id`` as read."""

        with request_operation(
            self.store, self.timeouts.listing, "mark all notifications read"
        ) as session:
            updated = NotificationRepository(session).mark_all_as_read(user_id)
        logger.debug("Marked %d notifications as read for user %s", updated, user_id)
        return updated

    def delete(self, notification_id: int) -> None:
        """Remove a notification; deleting twice is not an error."""

        with request_operation(
            self.store, self.timeouts.single_row, "delete notification"
        ) as session:
            NotificationRepository(session).delete(notification_id)


__all__ = ["NotificationService"]
