"""FastAPI application factories for the social and notification services."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from social_notifications.bootstrap import ServiceContainer, build_container
from social_notifications.config import Settings, get_settings
from social_notifications.interfaces.api.errors import register_exception_handlers
from social_notifications.interfaces.api.routes import (
    register_notification_routes,
    register_social_routes,
)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

NOTIFICATIONS = "notifications"
SOCIAL = "social"


def configure_logging(level: str) -> None:
    """Apply ``level`` to the root logger, installing a handler if none exists."""

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())


def create_app(
    settings: Settings | None = None,
    *,
    container: ServiceContainer | None = None,
    services: Iterable[str] = (NOTIFICATIONS, SOCIAL),
) -> FastAPI:
    """Create and configure a FastAPI application.

    ``services`` selects which surfaces the process serves, so the trigger API
    and the notification service can be deployed independently.
    """

    settings = settings or (container.settings if container else get_settings())
    configure_logging(settings.log_level)
    enabled = set(services)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the store and workers at startup and release them on shutdown."""

        owned = container is None
        active = container or build_container(settings)
        active.store.initialize()
        active.publisher.bind_loop(asyncio.get_running_loop())
        app.state.container = active
        yield
        active.publisher.bind_loop(None)
        if owned:
            active.close()

    app = FastAPI(lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    if NOTIFICATIONS in enabled:
        register_notification_routes(app)
    if SOCIAL in enabled:
        register_social_routes(app)
    return app


def create_notification_app(settings: Settings | None = None) -> FastAPI:
    return create_app(settings, services=(NOTIFICATIONS,))


def create_social_app(settings: Settings | None = None) -> FastAPI:
    return create_app(settings, services=(SOCIAL,))


__all__ = [
    "configure_logging",
    "create_app",
    "create_notification_app",
    "create_social_app",
]
