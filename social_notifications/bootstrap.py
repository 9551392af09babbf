"""Wiring of the store, worker pool and services owned by a running process."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from social_notifications.application.use_cases import (
    FanOutEngine,
    NotificationService,
    OperationTimeouts,
    SocialActionService,
)
from social_notifications.config import Settings, get_settings
from social_notifications.infrastructure.background import BackgroundTaskRunner
from social_notifications.infrastructure.database import Store
from social_notifications.infrastructure.events import EventSink, build_event_sink
from social_notifications.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationPublisher,
)

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Everything a request handler may need, built once at startup."""

    settings: Settings
    store: Store
    runner: BackgroundTaskRunner
    sink: EventSink
    connections: NotificationConnectionManager
    publisher: NotificationPublisher
    fanout: FanOutEngine
    notifications: NotificationService
    social: SocialActionService

    def close(self) -> None:
        """Drain detached work, then release the store."""

        if not self.runner.wait(timeout=self.settings.fanout_timeout_seconds):
            logger.warning("Shutting down with background notification work still running")
        self.runner.shutdown(wait=False)
        close_sink = getattr(self.sink, "close", None)
        if callable(close_sink):
            close_sink()
        self.store.dispose()


def build_container(
    settings: Settings | None = None,
    *,
    store: Store | None = None,
    runner: BackgroundTaskRunner | None = None,
    sink: EventSink | None = None,
) -> ServiceContainer:
    """Create the services for ``settings``; any collaborator may be injected."""

    settings = settings or get_settings()
    store = store or Store(settings.database_url)
    runner = runner or BackgroundTaskRunner(max_workers=settings.fanout_max_workers)
    sink = sink or build_event_sink(settings.redis_url, settings.event_stream)
    timeouts = OperationTimeouts.from_settings(settings)
    connections = NotificationConnectionManager()
    publisher = NotificationPublisher(connections)
    fanout = FanOutEngine(store, timeouts=timeouts, publisher=publisher)
    return ServiceContainer(
        settings=settings,
        store=store,
        runner=runner,
        sink=sink,
        connections=connections,
        publisher=publisher,
        fanout=fanout,
        notifications=NotificationService(store, timeouts=timeouts, publisher=publisher),
        social=SocialActionService(
            store, runner=runner, fanout=fanout, sink=sink, timeouts=timeouts
        ),
    )


__all__ = ["ServiceContainer", "build_container"]
