"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from social_notifications.domain.entities import Notification, NotificationType


class NotificationCreate(BaseModel):
    """Partial notification accepted by ``POST /notifications``.

    Both column naming schemes used by the services are accepted, e.g.
    ``recipient_id`` or ``user_id`` for the recipient. Identifiers, read state
    and timestamps are always assigned by the server.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    recipient_id: int = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("recipient_id", "recipient_user_id", "user_id"),
    )
    triggering_user_id: int | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("triggering_user_id", "sender_id"),
    )
    type: NotificationType = Field(
        ..., validation_alias=AliasChoices("type", "notification_type")
    )
    entity_id: int | None = Field(
        default=None, validation_alias=AliasChoices("entity_id", "resource_id")
    )
    content: str | None = Field(default=None, max_length=2000)
    resource_url: str | None = Field(default=None, max_length=255)

    def to_entity(self) -> Notification:
        return Notification(
            id=None,
            recipient_id=self.recipient_id,
            triggering_user_id=self.triggering_user_id,
            type=self.type,
            entity_id=self.entity_id,
            content=self.content,
            resource_url=self.resource_url,
        )


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    triggering_user_id: int | None = None
    type: NotificationType
    entity_id: int | None = None
    content: str | None = None
    resource_url: str | None = None
    is_read: bool
    created_at: datetime
    updated_at: datetime


class NotificationActionResult(BaseModel):
    """Acknowledgement returned by the mutating notification endpoints."""

    success: bool = True
    updated: int | None = None


__all__ = ["NotificationActionResult", "NotificationCreate", "NotificationRead"]
