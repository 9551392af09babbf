"""Pydantic models for the social trigger endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Payload used to publish a post as the authenticated account."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class PostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int
    title: str
    content: str
    created_at: datetime


class LikeRead(BaseModel):
    """State of a like after ``likePost``."""

    model_config = ConfigDict(from_attributes=True)

    post_id: int
    liked: bool
    created: bool


class UnlikeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    post_id: int
    removed: bool


class FollowRead(BaseModel):
    """State of a follow edge after ``followUser`` or ``unfollowUser``."""

    model_config = ConfigDict(from_attributes=True)

    followed_id: int
    following: bool
    changed: bool


__all__ = ["FollowRead", "LikeRead", "PostCreate", "PostRead", "UnlikeRead"]
