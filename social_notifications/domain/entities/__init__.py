"""Domain entities exposed by the application."""

from .account import Account
from .notification import DEDUPLICATED_TYPES, Notification, NotificationType
from .post import Post
from .social_action import FollowResult, LikeResult, UnlikeResult
from .social_event import (
    POST_CREATED,
    POST_LIKED,
    USER_FOLLOWED,
    FanOutReport,
    PostCreatedEvent,
    SocialEvent,
)

__all__ = [
    "Account",
    "DEDUPLICATED_TYPES",
    "Notification",
    "NotificationType",
    "Post",
    "LikeResult",
    "UnlikeResult",
    "FollowResult",
    "POST_CREATED",
    "POST_LIKED",
    "USER_FOLLOWED",
    "FanOutReport",
    "PostCreatedEvent",
    "SocialEvent",
]
