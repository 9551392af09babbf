"""Detached notification delivery: new-post fan-out and single-recipient helpers.

Everything in this module runs on the background worker pool, long after the
triggering request returned. Each entry point opens its own store operation
with its own deadline, and failures are logged only: they are never raised to
the caller and never retried.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from social_notifications.domain.entities import (
    FanOutReport,
    Notification,
    NotificationType,
    PostCreatedEvent,
)
from social_notifications.infrastructure.database import OperationTimeout, Store, StoreError
from social_notifications.infrastructure.notifications import NotificationPublisher
from social_notifications.infrastructure.repositories import (
    FollowRepository,
    NotificationRepository,
    PostRepository,
)

from .deadlines import OperationTimeouts

logger = logging.getLogger(__name__)


class FanOutEngine:
    """Turn one social action into per-recipient notification rows."""

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

    def fan_out_new_post(self, event: PostCreatedEvent) -> FanOutReport:
        """Notify every follower of ``event.actor_id`` about a new post.

        All rows share ``event.created_at``. A failed insert only costs that
        recipient its notification; a failed follower query or an expired
        deadline ends the run.
        """

        report = FanOutReport(post_id=event.post_id)
        logger.info(
            "Starting notification fan-out for post %s by author %s",
            event.post_id,
            event.actor_id,
        )
        try:
            with self.store.operation(self.timeouts.fanout) as session:
                try:
                    follower_ids = FollowRepository(session).list_follower_ids(event.actor_id)
                except (SQLAlchemyError, StoreError) as exc:
                    logger.error(
                        "Fan-out: error querying followers for author %s: %s",
                        event.actor_id,
                        exc,
                    )
                    report.aborted = True
                    return report

                report.recipients = len(follower_ids)
                if not follower_ids:
                    logger.info(
                        "Fan-out: no followers found for author %s; nothing to send",
                        event.actor_id,
                    )
                    return report

                logger.info(
                    "Fan-out: found %d followers for author %s; inserting notifications",
                    len(follower_ids),
                    event.actor_id,
                )
                repository = NotificationRepository(session)
                for recipient_id in follower_ids:
                    if recipient_id == event.actor_id:
                        continue
                    report.attempted += 1
                    try:
                        created = repository.create(
                            Notification(
                                id=None,
                                recipient_id=recipient_id,
                                triggering_user_id=event.actor_id,
                                type=NotificationType.NEW_POST,
                                entity_id=event.post_id,
                                created_at=event.created_at,
                            )
                        )
                    except OperationTimeout as exc:
                        session.rollback()
                        report.failed += 1
                        report.aborted = True
                        logger.error(
                            "Fan-out: deadline reached for post %s after %d attempts: %s",
                            event.post_id,
                            report.attempted,
                            exc,
                        )
                        break
                    except (SQLAlchemyError, StoreError) as exc:
                        session.rollback()
                        report.failed += 1
                        logger.error(
                            "Fan-out: error inserting notification for recipient %s: %s",
                            recipient_id,
                            exc,
                        )
                        continue
                    if created is None:
                        logger.debug(
                            "Fan-out: recipient %s already notified about post %s",
                            recipient_id,
                            event.post_id,
                        )
                        continue
                    report.inserted += 1
                    self._publish(created)
        except StoreError as exc:
            report.aborted = True
            logger.error("Fan-out for post %s failed: %s", event.post_id, exc)

        logger.info(
            "Fan-out finished for post %s: %d of %d notifications inserted",
            event.post_id,
            report.inserted,
            report.attempted,
        )
        return report

    def deliver_like_notification(self, actor_id: int, post_id: int) -> Notification | None:
        """Notify the author of ``post_id`` that ``actor_id`` liked it."""

        try:
            with self.store.operation(self.timeouts.notification) as session:
                author_id = PostRepository(session).get_author_id(post_id)
                if author_id is None:
                    logger.warning("Like notification: post %s no longer exists", post_id)
                    return None
                if author_id == actor_id:
                    return None
                created = NotificationRepository(session).create(
                    Notification(
                        id=None,
                        recipient_id=author_id,
                        triggering_user_id=actor_id,
                        type=NotificationType.LIKE,
                        entity_id=post_id,
                    )
                )
        except StoreError as exc:
            logger.error("Like notification for post %s failed: %s", post_id, exc)
            return None
        if created is not None:
            self._publish(created)
        return created

    def remove_like_notification(self, actor_id: int, post_id: int) -> int:
        """Delete the like notification produced when ``actor_id`` liked ``post_id``."""

        try:
            with self.store.operation(self.timeouts.notification) as session:
                author_id = PostRepository(session).get_author_id(post_id)
                if author_id is None or author_id == actor_id:
                    return 0
                return NotificationRepository(session).delete_by_event(
                    recipient_id=author_id,
                    triggering_user_id=actor_id,
                    notification_type=NotificationType.LIKE,
                    entity_id=post_id,
                )
        except StoreError as exc:
            logger.error("Like notification cleanup for post %s failed: %s", post_id, exc)
            return 0

    def deliver_follow_notification(self, actor_id: int, followed_id: int) -> Notification | None:
        """Notify ``followed_id`` that ``actor_id`` started following them."""

        if actor_id == followed_id:
            return None
        try:
            with self.store.operation(self.timeouts.follow_notification) as session:
                created = NotificationRepository(session).create(
                    Notification(
                        id=None,
                        recipient_id=followed_id,
                        triggering_user_id=actor_id,
                        type=NotificationType.FOLLOW,
                        entity_id=actor_id,
                    )
                )
        except StoreError as exc:
            logger.error("Follow notification for %s failed: %s", followed_id, exc)
            return None
        if created is None:
            logger.debug("Follow notification for %s already exists", followed_id)
            return None
        logger.info(
            "Inserted follow notification for %s triggered by %s", followed_id, actor_id
        )
        self._publish(created)
        return created

    def remove_follow_notification(self, actor_id: int, followed_id: int) -> int:
        try:
            with self.store.operation(self.timeouts.follow_notification) as session:
                return NotificationRepository(session).delete_by_event(
                    recipient_id=followed_id,
                    triggering_user_id=actor_id,
                    notification_type=NotificationType.FOLLOW,
                    entity_id=actor_id,
                )
        except StoreError as exc:
            logger.error("Follow notification cleanup for %s failed: %s", followed_id, exc)
            return 0

    def _publish(self, notification: Notification) -> None:
        if self.publisher is None:
            return
        try:
            self.publisher.dispatch(notification)
        except Exception:
            logger.exception("Realtime delivery of notification %s failed", notification.id)


__all__ = ["FanOutEngine"]
