"""Pluggable sinks that receive social events after a trigger succeeds."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any, Protocol

import redis

from social_notifications.domain.entities import SocialEvent

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Anything able to publish a :class:`SocialEvent`."""

    def publish(self, event: SocialEvent) -> None:  # pragma: no cover - protocol
        ...


class NullEventSink:
    """Sink used when no transport is configured."""

    def publish(self, event: SocialEvent) -> None:
        logger.debug("Discarding %s event for entity %s", event.event_type, event.entity_id)


class RedisStreamEventSink:
    """Append events to a Redis stream as ``{"data": <json>}`` entries."""

    def __init__(self, client: redis.Redis, stream: str) -> None:
        self._client = client
        self._stream = stream

    @classmethod
    def from_url(cls, url: str, stream: str) -> "RedisStreamEventSink":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        return cls(client, stream)

    def publish(self, event: SocialEvent) -> None:
        payload = serialize_event(event)
        self._client.xadd(self._stream, {"data": json.dumps(payload, ensure_ascii=False)})
        logger.info(
            "Published %s for entity %s to stream %s",
            event.event_type,
            event.entity_id,
            self._stream,
        )

    def close(self) -> None:
        self._client.close()


def serialize_event(event: SocialEvent) -> dict[str, Any]:
    """Return a JSON-serializable representation of ``event``."""

    payload = asdict(event)
    for key, value in list(payload.items()):
        if isinstance(value, datetime):
            payload[key] = value.isoformat()
    return payload


def build_event_sink(redis_url: str | None, stream: str) -> EventSink:
    """Return the sink matching the configuration."""

    if redis_url:
        return RedisStreamEventSink.from_url(redis_url, stream)
    return NullEventSink()


__all__ = [
    "EventSink",
    "NullEventSink",
    "RedisStreamEventSink",
    "build_event_sink",
    "serialize_event",
]
