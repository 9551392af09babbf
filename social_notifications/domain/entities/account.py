"""Domain entity representing a social account."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Account:
    """Minimal account attributes needed by the notification triggers."""

    id: int | None
    email: str
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime | None = None
