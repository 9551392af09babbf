"""ORM models used by the application infrastructure."""

from .account import AccountModel
from .follow import FollowModel
from .like import LikeModel
from .notification import NotificationModel
from .post import PostModel

__all__ = [
    "AccountModel",
    "FollowModel",
    "LikeModel",
    "NotificationModel",
    "PostModel",
]
