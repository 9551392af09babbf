"""Tests for the trigger actions and the work they schedule."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from social_notifications.application.use_cases import OperationTimeouts, SocialActionService
from social_notifications.domain.entities import (
    POST_CREATED,
    POST_LIKED,
    USER_FOLLOWED,
    NotificationType,
)
from social_notifications.domain.errors import (
    InternalError,
    InvalidOperationError,
    NotFoundError,
)
from social_notifications.infrastructure.repositories import (
    FollowRepository,
    LikeRepository,
)


def _drain(container) -> None:
    assert container.runner.wait(timeout=10)


def test_create_post_notifies_followers_but_not_the_author(
    container, make_account, follow, notifications_for
):
    author = make_account("u1")
    second, third = make_account("u2"), make_account("u3")
    follow(second, author)
    follow(third, author)

    post = container.social.create_post(author, title="Launch", content="We shipped")
    _drain(container)

    assert post.id is not None
    assert post.created_at is not None
    for follower in (second, third):
        [notification] = notifications_for(follower)
        assert notification.type is NotificationType.NEW_POST
        assert notification.entity_id == post.id
        assert notification.triggering_user_id == author
        assert notification.created_at == post.created_at
    assert notifications_for(author) == []
    assert [event.event_type for event in container.sink.events] == [POST_CREATED]


def test_create_post_succeeds_when_the_follower_query_fails(
    container, store, make_account, follow, notifications_for, monkeypatch
):
    author, follower = make_account("author"), make_account("reader")
    follow(follower, author)

    def broken(self, followed_id):
        raise OperationalError("SELECT follower_user_id", {}, Exception("connection reset"))

    monkeypatch.setattr(FollowRepository, "list_follower_ids", broken)

    post = container.social.create_post(author, title="Still here", content="body")
    _drain(container)

    assert post.id is not None
    assert notifications_for(follower) == []


def test_create_post_rejects_missing_author(container):
    with pytest.raises(NotFoundError):
        container.social.create_post(404, title="Ghost", content="boo")


def test_create_post_requires_a_title(container, make_account):
    author = make_account("author")

    with pytest.raises(InvalidOperationError):
        container.social.create_post(author, title="   ", content="body")


def test_create_post_past_its_deadline_is_an_internal_error(
    store, runner, sink, container, make_account
):
    author = make_account("author")
    service = SocialActionService(
        store,
        runner=runner,
        fanout=container.fanout,
        sink=sink,
        timeouts=OperationTimeouts(single_row=0),
    )

    with pytest.raises(InternalError) as excinfo:
        service.create_post(author, title="Late", content="too late")

    assert "timed out" in excinfo.value.detail
    assert sink.events == []


def test_double_like_creates_one_like_and_one_notification(
    container, store, make_account, make_post, notifications_for
):
    author, reader = make_account("author"), make_account("reader")
    post = make_post(author)

    first = container.social.like_post(reader, post.id)
    second = container.social.like_post(reader, post.id)
    _drain(container)

    assert first.liked and first.created
    assert second.liked and not second.created
    with store.operation(5) as session:
        assert LikeRepository(session).exists(post.id, reader)
    [notification] = notifications_for(author)
    assert notification.type is NotificationType.LIKE
    assert notification.triggering_user_id == reader
    assert [event.event_type for event in container.sink.events] == [POST_LIKED]


def test_like_of_missing_post_is_not_found(container, make_account):
    reader = make_account("reader")

    with pytest.raises(NotFoundError):
        container.social.like_post(reader, 12345)


def test_liking_own_post_records_the_like_without_notification(
    container, make_account, make_post, notifications_for
):
    author = make_account("author")
    post = make_post(author)

    result = container.social.like_post(author, post.id)
    _drain(container)

    assert result.liked
    assert notifications_for(author) == []


def test_unlike_removes_the_like_notification(
    container, make_account, make_post, notifications_for
):
    author, reader = make_account("author"), make_account("reader")
    post = make_post(author)
    container.social.like_post(reader, post.id)
    _drain(container)

    result = container.social.unlike_post(reader, post.id)
    _drain(container)

    assert result.removed is True
    assert notifications_for(author) == []


def test_unlike_without_a_like_schedules_nothing(container, make_account, make_post, monkeypatch):
    author, reader = make_account("author"), make_account("reader")
    post = make_post(author)
    submitted = []
    monkeypatch.setattr(
        container.runner, "submit", lambda name, *args, **kwargs: submitted.append(name)
    )

    result = container.social.unlike_post(reader, post.id)

    assert result.removed is False
    assert submitted == []


def test_follow_creates_edge_and_notification(container, store, make_account, notifications_for):
    follower, followed = make_account("follower"), make_account("followed")

    first = container.social.follow_user(follower, followed)
    again = container.social.follow_user(follower, followed)
    _drain(container)

    assert first.following and first.changed
    assert again.following and not again.changed
    with store.operation(5) as session:
        assert FollowRepository(session).is_following(follower, followed)
    [notification] = notifications_for(followed)
    assert notification.type is NotificationType.FOLLOW
    assert notification.entity_id == follower
    assert [event.event_type for event in container.sink.events] == [USER_FOLLOWED]


def test_self_follow_is_rejected_without_writing(container, store, make_account):
    account = make_account("narcissus")

    with pytest.raises(InvalidOperationError) as excinfo:
        container.social.follow_user(account, account)

    assert excinfo.value.message == "cannot follow yourself"
    with store.operation(5) as session:
        assert not FollowRepository(session).is_following(account, account)


def test_follow_of_missing_account_is_not_found(container, make_account):
    follower = make_account("follower")

    with pytest.raises(NotFoundError):
        container.social.follow_user(follower, 9999)


def test_unfollow_removes_edge_and_follow_notification(
    container, store, make_account, notifications_for
):
    follower, followed = make_account("follower"), make_account("followed")
    container.social.follow_user(follower, followed)
    _drain(container)

    result = container.social.unfollow_user(follower, followed)
    _drain(container)

    assert result.changed and not result.following
    with store.operation(5) as session:
        assert not FollowRepository(session).is_following(follower, followed)
    assert notifications_for(followed) == []


def test_unfollow_twice_is_a_no_op(container, make_account):
    follower, followed = make_account("follower"), make_account("followed")

    result = container.social.unfollow_user(follower, followed)

    assert result.changed is False


def test_like_by_missing_account_is_not_found(container, store, make_account, make_post):
    author = make_account("author")
    post = make_post(author)

    with pytest.raises(NotFoundError):
        container.social.like_post(4242, post.id)

    with store.operation(5) as session:
        assert not LikeRepository(session).exists(post.id, 4242)


def test_follow_by_missing_account_is_not_found(container, store, make_account):
    followed = make_account("followed")

    with pytest.raises(NotFoundError):
        container.social.follow_user(4242, followed)

    with store.operation(5) as session:
        assert not FollowRepository(session).is_following(4242, followed)


def test_self_like_schedules_no_notification_task(container, make_account, make_post, monkeypatch):
    author = make_account("author")
    post = make_post(author)
    submitted = []
    monkeypatch.setattr(
        container.runner, "submit", lambda name, *args, **kwargs: submitted.append(name)
    )

    result = container.social.like_post(author, post.id)

    assert result.created is True
    assert not any(name.startswith("like notification") for name in submitted)
    assert submitted == [f"publish {POST_LIKED}"]
