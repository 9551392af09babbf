from fastapi import FastAPI

from .notifications import router as notifications_router
from .social import router as social_router


def register_notification_routes(app: FastAPI) -> None:
    """Register the notification service routers."""

    app.include_router(notifications_router)


def register_social_routes(app: FastAPI) -> None:
    """Register the social trigger routers."""

    app.include_router(social_router)
