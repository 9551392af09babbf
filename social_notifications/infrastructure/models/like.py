"""SQLAlchemy model for post likes."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, func

from social_notifications.infrastructure.database import Base


class LikeModel(Base):
    """A like given by ``user_id`` to ``post_id``; the pair is the primary key."""

    __tablename__ = "likes"

    post_id = Column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


__all__ = ["LikeModel"]
