"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.sql import expression

from social_notifications.domain.entities import DEDUPLICATED_TYPES
from social_notifications.infrastructure.database import Base

_DEDUPLICATED = text(
    "notification_type IN ({})".format(
        ", ".join(f"'{kind.value}'" for kind in sorted(DEDUPLICATED_TYPES, key=lambda k: k.value))
    )
)


class NotificationModel(Base):
    """Database representation for user notifications.

    Like, follow and new-post rows are unique per event; a repeated trigger
    (a second like, a re-follow) never produces a second row. Every other
    type may repeat freely.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        CheckConstraint(
            "triggering_user_id IS NULL OR recipient_user_id <> triggering_user_id",
            name="ck_notifications_no_self_notification",
        ),
        Index(
            "uq_notifications_event",
            "recipient_user_id",
            "triggering_user_id",
            "notification_type",
            "entity_id",
            unique=True,
            sqlite_where=_DEDUPLICATED,
            postgresql_where=_DEDUPLICATED,
        ),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    recipient_user_id = Column(Integer, nullable=False, index=True)
    triggering_user_id = Column(Integer, nullable=True)
    notification_type = Column(String(20), nullable=False)
    entity_id = Column(Integer, nullable=True)
    content = Column(Text, nullable=True)
    resource_url = Column(String(255), nullable=True)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


__all__ = ["NotificationModel"]
