"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Kinds of notifications produced by social actions."""

    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    MENTION = "mention"
    MESSAGE = "message"
    SYSTEM = "system"
    NEW_POST = "new_post"


# One row per event for these types; repeated triggers are absorbed.
DEDUPLICATED_TYPES = frozenset(
    {NotificationType.LIKE, NotificationType.FOLLOW, NotificationType.NEW_POST}
)


@dataclass
class Notification:
    """Information message delivered to a specific recipient."""

    id: int | None
    recipient_id: int
    triggering_user_id: int | None
    type: NotificationType
    entity_id: int | None = None
    content: str | None = None
    resource_url: str | None = None
    is_read: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_self_notification(self) -> bool:
        """Return ``True`` when the recipient also triggered the notification."""

        return (
            self.triggering_user_id is not None
            and self.triggering_user_id == self.recipient_id
        )


__all__ = ["DEDUPLICATED_TYPES", "Notification", "NotificationType"]
