"""Trigger actions: the synchronous half of create post, like and follow.

Each action performs its primary write inside the request, under a bounded
store operation, then hands notification work to the background runner. The
request never waits for that work and never sees its failures.
"""

from __future__ import annotations

import logging

from social_notifications.domain.entities import (
    POST_CREATED,
    POST_LIKED,
    USER_FOLLOWED,
    FollowResult,
    LikeResult,
    Post,
    PostCreatedEvent,
    SocialEvent,
    UnlikeResult,
)
from social_notifications.domain.errors import InvalidOperationError, NotFoundError
from social_notifications.infrastructure.background import BackgroundTaskRunner
from social_notifications.infrastructure.database import Store
from social_notifications.infrastructure.events import EventSink, NullEventSink
from social_notifications.infrastructure.repositories import (
    AccountRepository,
    FollowRepository,
    LikeRepository,
    PostRepository,
)
from social_notifications.utils import now_utc

from .deadlines import OperationTimeouts, request_operation
from .fanout import FanOutEngine

logger = logging.getLogger(__name__)


class SocialActionService:
    """Entry points for the ``createPost``, ``likePost``, ``unlikePost``,
    ``followUser`` and ``unfollowUser`` actions."""

    def __init__(
        self,
        store: Store,
        *,
        runner: BackgroundTaskRunner,
        fanout: FanOutEngine,
        sink: EventSink | None = None,
        timeouts: OperationTimeouts | None = None,
    ) -> None:
        self.store = store
        self.runner = runner
        self.fanout = fanout
        self.sink = sink or NullEventSink()
        self.timeouts = timeouts or OperationTimeouts()

    def create_post(self, actor_id: int, *, title: str, content: str) -> Post:
        """Insert a post authored by ``actor_id`` and schedule the follower fan-out."""

        title = (title or "").strip()
        if not title:
            raise InvalidOperationError("post title is required")
        if not content:
            raise InvalidOperationError("post content is required")

        with request_operation(self.store, self.timeouts.single_row, "create post") as session:
            if not AccountRepository(session).exists(actor_id):
                raise NotFoundError("author not found", detail=f"account {actor_id}")
            post = PostRepository(session).create(
                author_id=actor_id, title=title, content=content
            )

        logger.info("Post created with ID %s by author %s", post.id, actor_id)
        event = PostCreatedEvent(actor_id=actor_id, post_id=post.id, created_at=post.created_at)
        self.runner.submit(f"fan-out post {post.id}", self.fanout.fan_out_new_post, event)
        self._publish(
            SocialEvent(
                event_type=POST_CREATED,
                actor_id=actor_id,
                entity_id=post.id,
                occurred_at=post.created_at,
                payload={"title": title},
            )
        )
        return post

    def like_post(self, actor_id: int, post_id: int) -> LikeResult:
        """Like ``post_id``; repeating the call is a successful no-op."""

        with request_operation(self.store, self.timeouts.single_row, "like post") as session:
            if not AccountRepository(session).exists(actor_id):
                raise NotFoundError("account not found", detail=f"account {actor_id}")
            author_id = PostRepository(session).get_author_id(post_id)
            if author_id is None:
                raise NotFoundError("post not found", detail=f"post {post_id}")
            likes = LikeRepository(session)
            created = likes.like(post_id, actor_id)
            liked = likes.exists(post_id, actor_id)

        if created and liked:
            if author_id != actor_id:
                self.runner.submit(
                    f"like notification post {post_id}",
                    self.fanout.deliver_like_notification,
                    actor_id,
                    post_id,
                )
            self._publish(
                SocialEvent(
                    event_type=POST_LIKED,
                    actor_id=actor_id,
                    entity_id=post_id,
                    occurred_at=now_utc(),
                )
            )
        return LikeResult(post_id=post_id, liked=liked, created=created)

    def unlike_post(self, actor_id: int, post_id: int) -> UnlikeResult:
        """Remove the like; cleanup only runs when a like actually existed."""

        with request_operation(self.store, self.timeouts.single_row, "unlike post") as session:
            removed = LikeRepository(session).unlike(post_id, actor_id)

        if removed:
            self.runner.submit(
                f"like notification cleanup post {post_id}",
                self.fanout.remove_like_notification,
                actor_id,
                post_id,
            )
        return UnlikeResult(post_id=post_id, removed=removed)

    def follow_user(self, actor_id: int, followed_id: int) -> FollowResult:
        if actor_id == followed_id:
            raise InvalidOperationError("cannot follow yourself")

        with request_operation(self.store, self.timeouts.single_row, "follow user") as session:
            accounts = AccountRepository(session)
            if not accounts.exists(actor_id):
                raise NotFoundError("account not found", detail=f"account {actor_id}")
            if not accounts.exists(followed_id):
                raise NotFoundError("user to follow not found", detail=f"account {followed_id}")
            created = FollowRepository(session).follow(actor_id, followed_id)

        logger.info("User %s followed user %s (new edge: %s)", actor_id, followed_id, created)
        if created:
            self.runner.submit(
                f"follow notification {followed_id}",
                self.fanout.deliver_follow_notification,
                actor_id,
                followed_id,
            )
            self._publish(
                SocialEvent(
                    event_type=USER_FOLLOWED,
                    actor_id=actor_id,
                    entity_id=followed_id,
                    occurred_at=now_utc(),
                )
            )
        return FollowResult(followed_id=followed_id, following=True, changed=created)

    def unfollow_user(self, actor_id: int, followed_id: int) -> FollowResult:
        if actor_id == followed_id:
            raise InvalidOperationError("cannot unfollow yourself")

        with request_operation(self.store, self.timeouts.single_row, "unfollow user") as session:
            removed = FollowRepository(session).unfollow(actor_id, followed_id)

        logger.info("User %s unfollowed user %s (removed: %s)", actor_id, followed_id, removed)
        if removed:
            self.runner.submit(
                f"follow notification cleanup {followed_id}",
                self.fanout.remove_follow_notification,
                actor_id,
                followed_id,
            )
        return FollowResult(followed_id=followed_id, following=False, changed=removed)

    def _publish(self, event: SocialEvent) -> None:
        self.runner.submit(f"publish {event.event_type}", self.sink.publish, event)


__all__ = ["SocialActionService"]
