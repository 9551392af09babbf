"""Repository implementations for infrastructure layer."""

from .account_repository import AccountRepository
from .follow_repository import FollowRepository
from .like_repository import LikeRepository
from .notification_repository import NotificationRepository
from .post_repository import PostRepository

__all__ = [
    "AccountRepository",
    "FollowRepository",
    "LikeRepository",
    "NotificationRepository",
    "PostRepository",
]
