"""Persistence layer for post likes."""

from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.orm import Session

from social_notifications.infrastructure.models import LikeModel

from ._upsert import execute_insert_ignoring_conflicts


class LikeRepository:
    """Read and write ``(post, user)`` like rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def like(self, post_id: int, user_id: int) -> bool:
        """Insert the like idempotently; return ``True`` when it is new."""

        inserted = execute_insert_ignoring_conflicts(
            self.session, LikeModel, {"post_id": post_id, "user_id": user_id}
        )
        self.session.commit()
        return inserted > 0

    def exists(self, post_id: int, user_id: int) -> bool:
        query = self.session.query(LikeModel).filter(
            LikeModel.post_id == post_id, LikeModel.user_id == user_id
        )
        return self.session.query(query.exists()).scalar() or False

    def unlike(self, post_id: int, user_id: int) -> bool:
        """Delete the like; return ``True`` when a row was removed."""

        result = self.session.execute(
            delete(LikeModel).where(
                LikeModel.post_id == post_id, LikeModel.user_id == user_id
            )
        )
        self.session.commit()
        return (result.rowcount or 0) > 0


__all__ = ["LikeRepository"]
