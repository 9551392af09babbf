"""Persistence layer for follow edges."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from social_notifications.infrastructure.models import FollowModel

from ._upsert import execute_insert_ignoring_conflicts


class FollowRepository:
    """Read and write ``follower -> followed`` edges."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def follow(self, follower_id: int, followed_id: int) -> bool:
        """Insert the edge idempotently; return ``True`` when it is new."""

        inserted = execute_insert_ignoring_conflicts(
            self.session,
            FollowModel,
            {"follower_user_id": follower_id, "followed_user_id": followed_id},
        )
        self.session.commit()
        return inserted > 0

    def unfollow(self, follower_id: int, followed_id: int) -> bool:
        """Delete the edge; return ``True`` when a row was removed."""

        result = self.session.execute(
            delete(FollowModel).where(
                FollowModel.follower_user_id == follower_id,
                FollowModel.followed_user_id == followed_id,
            )
        )
        self.session.commit()
        return (result.rowcount or 0) > 0

    def is_following(self, follower_id: int, followed_id: int) -> bool:
        query = self.session.query(FollowModel).filter(
            FollowModel.follower_user_id == follower_id,
            FollowModel.followed_user_id == followed_id,
        )
        return self.session.query(query.exists()).scalar() or False

    def list_follower_ids(self, followed_id: int) -> list[int]:
        """Return every account following ``followed_id`` in store order."""

        rows = self.session.execute(
            select(FollowModel.follower_user_id).where(
                FollowModel.followed_user_id == followed_id
            )
        )
        return [follower_id for (follower_id,) in rows]


__all__ = ["FollowRepository"]
