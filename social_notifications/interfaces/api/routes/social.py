"""Trigger endpoints for posts, likes and follows."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from social_notifications.application.use_cases import SocialActionService
from social_notifications.interfaces.api.dependencies import (
    get_current_account_id,
    get_social_service,
    parse_identifier,
)
from social_notifications.interfaces.api.schemas import (
    FollowRead,
    LikeRead,
    PostCreate,
    PostRead,
    UnlikeRead,
)

router = APIRouter(tags=["social"])


@router.post("/posts", response_model=PostRead, status_code=status.HTTP_201_CREATED)
def create_post(
    post_in: PostCreate,
    actor_id: int = Depends(get_current_account_id),
    service: SocialActionService = Depends(get_social_service),
) -> PostRead:
    """Publish a post; followers are notified in the background."""

    post = service.create_post(actor_id, title=post_in.title, content=post_in.content)
    return PostRead.model_validate(post)


@router.post("/posts/{post_id}/like", response_model=LikeRead)
def like_post(
    post_id: str,
    actor_id: int = Depends(get_current_account_id),
    service: SocialActionService = Depends(get_social_service),
) -> LikeRead:
    result = service.like_post(actor_id, parse_identifier(post_id, "post ID"))
    return LikeRead.model_validate(result)


@router.delete("/posts/{post_id}/like", response_model=UnlikeRead)
def unlike_post(
    post_id: str,
    actor_id: int = Depends(get_current_account_id),
    service: SocialActionService = Depends(get_social_service),
) -> UnlikeRead:
    result = service.unlike_post(actor_id, parse_identifier(post_id, "post ID"))
    return UnlikeRead.model_validate(result)


@router.post("/accounts/{account_id}/follow", response_model=FollowRead)
def follow_user(
    account_id: str,
    actor_id: int = Depends(get_current_account_id),
    service: SocialActionService = Depends(get_social_service),
) -> FollowRead:
    """Follow ``account_id`` as the authenticated account."""

    result = service.follow_user(actor_id, parse_identifier(account_id, "account ID"))
    return FollowRead.model_validate(result)


@router.delete("/accounts/{account_id}/follow", response_model=FollowRead)
def unfollow_user(
    account_id: str,
    actor_id: int = Depends(get_current_account_id),
    service: SocialActionService = Depends(get_social_service),
) -> FollowRead:
    result = service.unfollow_user(actor_id, parse_identifier(account_id, "account ID"))
    return FollowRead.model_validate(result)
