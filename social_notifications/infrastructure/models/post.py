"""SQLAlchemy model for the posts table."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from social_notifications.infrastructure.database import Base


class PostModel(Base):
    """Database representation of a post."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


__all__ = ["PostModel"]
