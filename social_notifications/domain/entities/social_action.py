"""Results returned by the like and follow trigger actions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LikeResult:
    """Outcome of a like request.

    ``liked`` reports the like state after the request; ``created`` is only
    ``True`` when this request made the like exist.
    """

    post_id: int
    liked: bool
    created: bool


@dataclass(frozen=True)
class UnlikeResult:
    """Outcome of an unlike request; ``removed`` mirrors the affected-row count."""

    post_id: int
    removed: bool


@dataclass(frozen=True)
class FollowResult:
    """Outcome of a follow or unfollow request."""

    followed_id: int
    following: bool
    changed: bool
