"""Endpoints and websocket handler of the notification service."""

from __future__ import annotations

import logging
from functools import partial

import anyio

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from social_notifications.application.use_cases import NotificationService
from social_notifications.bootstrap import ServiceContainer
from social_notifications.domain.entities import Notification
from social_notifications.domain.errors import SocialError
from social_notifications.infrastructure.notifications import serialize_notification
from social_notifications.interfaces.api.dependencies import (
    get_notification_service,
    parse_identifier,
    resolve_current_account_id,
)
from social_notifications.interfaces.api.schemas import (
    NotificationActionResult,
    NotificationCreate,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.post("", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification_in: NotificationCreate,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationRead:
    """Create a notification; id, read state and timestamps are server-assigned."""

    created = service.create(notification_in.to_entity())
    return _notification_to_schema(created)


@router.get("/user/{user_id}", response_model=list[NotificationRead])
def list_user_notifications(
    user_id: str,
    service: NotificationService = Depends(get_notification_service),
) -> list[NotificationRead]:
    """Return every notification of ``user_id``, newest first."""

    notifications = service.list_by_user(parse_identifier(user_id, "user ID"))
    return [_notification_to_schema(notification) for notification in notifications]


@router.put("/user/{user_id}/read-all", response_model=NotificationActionResult)
def mark_all_notifications_read(
    user_id: str,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationActionResult:
    """Mark every unread notification of ``user_id`` as read."""

    updated = service.mark_all_as_read(parse_identifier(user_id, "user ID"))
    return NotificationActionResult(updated=updated)


@router.put("/{notification_id}/read", response_model=NotificationActionResult)
def mark_notification_read(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationActionResult:
    """Mark a single notification as read."""

    service.mark_as_read(parse_identifier(notification_id, "notification ID"))
    return NotificationActionResult()


@router.delete("/{notification_id}", response_model=NotificationActionResult)
def delete_notification(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationActionResult:
    """Delete a notification."""

    service.delete(parse_identifier(notification_id, "notification ID"))
    return NotificationActionResult()


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated account."""

    container: ServiceContainer = websocket.app.state.container
    service = container.notifications
    try:
        account_id = resolve_current_account_id(websocket.query_params.get("token"))
    except SocialError:
        await websocket.close(code=1008)
        return

    try:
        pending_notifications = await anyio.to_thread.run_sync(
            service.list_unread, account_id
        )
    except SocialError:
        await websocket.close(code=1011)
        return

    await container.connections.connect(account_id, websocket)
    try:
        if pending_notifications:
            await websocket.send_json(
                {
                    "type": "init",
                    "data": [serialize_notification(n) for n in pending_notifications],
                }
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    valid_ids = [value for value in ids if isinstance(value, int)]
                    try:
                        await anyio.to_thread.run_sync(
                            partial(service.mark_many_as_read, valid_ids, user_id=account_id)
                        )
                    except SocialError:
                        logger.warning("Could not acknowledge notifications for %s", account_id)
                continue
    except WebSocketDisconnect:
        container.connections.disconnect(account_id, websocket)
    except Exception:
        container.connections.disconnect(account_id, websocket)
        raise
