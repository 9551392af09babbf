"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_timezone,
    ensure_utc,
    get_app_timezone,
    now_utc,
)

__all__ = [
    "ensure_app_timezone",
    "ensure_utc",
    "get_app_timezone",
    "now_utc",
]
