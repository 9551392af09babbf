"""Persistence layer for posts."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from social_notifications.domain.entities import Post
from social_notifications.infrastructure.models import PostModel
from social_notifications.utils import ensure_app_timezone


class PostRepository:
    """Create and look up :class:`Post` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, author_id: int, title: str, content: str) -> Post:
        """Insert a post and return it with the store-assigned id and timestamp.

        The id and ``created_at`` come back from the same ``INSERT ... RETURNING``
        round trip.
        """

        statement = (
            insert(PostModel)
            .values(author_id=author_id, title=title, content=content)
            .returning(PostModel.id, PostModel.created_at)
        )
        post_id, created_at = self.session.execute(statement).one()
        self.session.commit()
        return Post(
            id=post_id,
            author_id=author_id,
            title=title,
            content=content,
            created_at=ensure_app_timezone(created_at),
        )

    def get_author_id(self, post_id: int) -> int | None:
        return self.session.execute(
            select(PostModel.author_id).where(PostModel.id == post_id)
        ).scalar_one_or_none()


__all__ = ["PostRepository"]
