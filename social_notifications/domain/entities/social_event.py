"""Events emitted by the trigger actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

POST_CREATED = "post.created"
POST_LIKED = "post.liked"
USER_FOLLOWED = "user.followed"


@dataclass(frozen=True)
class PostCreatedEvent:
    """Input of a new-post fan-out run."""

    actor_id: int
    post_id: int
    created_at: datetime


@dataclass(frozen=True)
class SocialEvent:
    """Envelope handed to event sinks after a trigger action succeeds."""

    event_type: str
    actor_id: int
    entity_id: int
    occurred_at: datetime
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass
class FanOutReport:
    """Summary of a fan-out run, logged once the run ends."""

    post_id: int
    recipients: int = 0
    attempted: int = 0
    inserted: int = 0
    failed: int = 0
    aborted: bool = False
