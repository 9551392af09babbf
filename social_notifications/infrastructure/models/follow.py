"""SQLAlchemy model for follow edges."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, func

from social_notifications.infrastructure.database import Base


class FollowModel(Base):
    """A directed ``follower -> followed`` edge; the pair is the primary key."""

    __tablename__ = "follows"
    __table_args__ = (
        CheckConstraint(
            "follower_user_id <> followed_user_id", name="ck_follows_no_self_follow"
        ),
    )

    follower_user_id = Column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True
    )
    followed_user_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


__all__ = ["FollowModel"]
