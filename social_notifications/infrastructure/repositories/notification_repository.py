"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy import delete, insert, update
from sqlalchemy.orm import Session

from social_notifications.domain.entities import Notification, NotificationType
from social_notifications.infrastructure.models import NotificationModel
from social_notifications.utils import ensure_app_timezone, ensure_utc, now_utc

from ._upsert import insert_ignoring_conflicts


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification | None:
        """Insert ``notification`` and return the stored row.

        ``is_read`` is always stored as ``False``. When ``created_at`` is not
        provided the current time is used, and ``updated_at`` starts equal to
        ``created_at``. Returns ``None`` when a like, follow or new-post row for
        the same event already exists; other types always insert.
        """

        created_at = ensure_utc(notification.created_at) or now_utc()
        values = {
            "recipient_user_id": notification.recipient_id,
            "triggering_user_id": notification.triggering_user_id,
            "notification_type": NotificationType(notification.type).value,
            "entity_id": notification.entity_id,
            "content": notification.content,
            "resource_url": notification.resource_url,
            "is_read": False,
            "created_at": created_at,
            "updated_at": created_at,
        }
        statement = insert_ignoring_conflicts(self.session, NotificationModel, values)
        if statement is None:
            statement = insert(NotificationModel).values(**values)
        model = self.session.scalars(statement.returning(NotificationModel)).first()
        self.session.commit()
        return self._to_entity(model) if model is not None else None

    def get_by_event(
        self,
        *,
        recipient_id: int,
        triggering_user_id: int | None,
        notification_type: NotificationType,
        entity_id: int | None,
    ) -> Notification | None:
        query = self._event_query(
            recipient_id=recipient_id,
            triggering_user_id=triggering_user_id,
            notification_type=notification_type,
            entity_id=entity_id,
        )
        model = query.order_by(NotificationModel.id.desc()).first()
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = None,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.recipient_user_id == user_id)
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def mark_as_read(self, notification_id: int) -> int:
        result = self.session.execute(
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .values(is_read=True, updated_at=now_utc())
        )
        self.session.commit()
        return result.rowcount or 0

    def mark_many_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        result = self.session.execute(
            update(NotificationModel)
            .where(
                NotificationModel.id.in_(ids),
                NotificationModel.recipient_user_id == user_id,
            )
            .values(is_read=True, updated_at=now_utc())
        )
        self.session.commit()
        return result.rowcount or 0

    def mark_all_as_read(self, user_id: int) -> int:
        result = self.session.execute(
            update(NotificationModel)
            .where(
                NotificationModel.recipient_user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True, updated_at=now_utc())
        )
        self.session.commit()
        return result.rowcount or 0

    def delete(self, notification_id: int) -> int:
        result = self.session.execute(
            delete(NotificationModel).where(NotificationModel.id == notification_id)
        )
        self.session.commit()
        return result.rowcount or 0

    def delete_by_event(
        self,
        *,
        recipient_id: int,
        triggering_user_id: int,
        notification_type: NotificationType,
        entity_id: int,
    ) -> int:
        result = self.session.execute(
            delete(NotificationModel).where(
                NotificationModel.recipient_user_id == recipient_id,
                NotificationModel.triggering_user_id == triggering_user_id,
                NotificationModel.notification_type == NotificationType(notification_type).value,
                NotificationModel.entity_id == entity_id,
            )
        )
        self.session.commit()
        return result.rowcount or 0

    def _event_query(
        self,
        *,
        recipient_id: int,
        triggering_user_id: int | None,
        notification_type: NotificationType,
        entity_id: int | None,
    ):
        query = self.session.query(NotificationModel).filter(
            NotificationModel.recipient_user_id == recipient_id,
            NotificationModel.notification_type == NotificationType(notification_type).value,
        )
        if triggering_user_id is None:
            query = query.filter(NotificationModel.triggering_user_id.is_(None))
        else:
            query = query.filter(NotificationModel.triggering_user_id == triggering_user_id)
        if entity_id is None:
            query = query.filter(NotificationModel.entity_id.is_(None))
        else:
            query = query.filter(NotificationModel.entity_id == entity_id)
        return query

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_user_id,
            triggering_user_id=model.triggering_user_id,
            type=NotificationType(model.notification_type),
            entity_id=model.entity_id,
            content=model.content,
            resource_url=model.resource_url,
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository"]
