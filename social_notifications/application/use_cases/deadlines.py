"""Operation budgets and the guard that turns store failures into ``InternalError``."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy.orm import Session

from social_notifications.config import Settings
from social_notifications.domain.errors import InternalError
from social_notifications.infrastructure.database import OperationTimeout, Store, StoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationTimeouts:
    """Deadlines, in seconds, for each kind of unit of work."""

    single_row: float = 5.0
    listing: float = 10.0
    notification: float = 10.0
    follow_notification: float = 5.0
    fanout: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "OperationTimeouts":
        return cls(
            single_row=settings.single_row_timeout_seconds,
            listing=settings.list_timeout_seconds,
            notification=settings.notification_timeout_seconds,
            follow_notification=settings.follow_notification_timeout_seconds,
            fanout=settings.fanout_timeout_seconds,
        )


@contextmanager
def request_operation(store: Store, timeout: float, action: str) -> Iterator[Session]:
    """Run a request-scoped store operation.

    Store failures and expired deadlines are logged with their detail and
    re-raised as a generic :class:`InternalError`; they are never retried.
    """

    try:
        with store.operation(timeout) as session:
            yield session
    except OperationTimeout as exc:
        logger.error("%s timed out: %s", action, exc)
        raise InternalError(detail=f"{action} timed out") from exc
    except StoreError as exc:
        logger.error("%s failed: %s", action, exc)
        raise InternalError(detail=f"{action} failed") from exc


__all__ = ["OperationTimeouts", "request_operation"]
