"""Domain entity representing a post."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Post:
    """A post published by an account.

    ``created_at`` is assigned by the store and becomes the ordering key for
    every notification derived from the post.
    """

    id: int | None
    author_id: int
    title: str
    content: str
    created_at: datetime | None = None
