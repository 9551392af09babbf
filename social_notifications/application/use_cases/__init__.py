"""Aggregate application use cases."""

from .deadlines import OperationTimeouts, request_operation
from .fanout import FanOutEngine
from .notifications import NotificationService
from .social import SocialActionService

__all__ = [
    "FanOutEngine",
    "NotificationService",
    "OperationTimeouts",
    "SocialActionService",
    "request_operation",
]
