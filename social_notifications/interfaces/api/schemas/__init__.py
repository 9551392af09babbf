from .notification import NotificationActionResult, NotificationCreate, NotificationRead
from .social import FollowRead, LikeRead, PostCreate, PostRead, UnlikeRead

__all__ = [
    "NotificationActionResult",
    "NotificationCreate",
    "NotificationRead",
    "FollowRead",
    "LikeRead",
    "PostCreate",
    "PostRead",
    "UnlikeRead",
]
