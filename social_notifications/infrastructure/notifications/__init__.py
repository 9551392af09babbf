"""Realtime notification helpers for the infrastructure layer."""

from .manager import NotificationConnectionManager
from .publisher import NotificationPublisher, serialize_notification

__all__ = [
    "NotificationConnectionManager",
    "NotificationPublisher",
    "serialize_notification",
]
