"""SQLAlchemy model for the accounts table."""

from sqlalchemy import Column, DateTime, Integer, String, func

from social_notifications.infrastructure.database import Base


class AccountModel(Base):
    """Database representation of a social account."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    first_name = Column(String(80), nullable=True)
    last_name = Column(String(80), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


__all__ = ["AccountModel"]
