"""FastAPI dependency utilities."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from social_notifications.application.use_cases import NotificationService, SocialActionService
from social_notifications.bootstrap import ServiceContainer
from social_notifications.domain.errors import InvalidOperationError, UnauthenticatedError
from social_notifications.infrastructure.security import resolve_account_id

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_notification_service(
    container: ServiceContainer = Depends(get_container),
) -> NotificationService:
    return container.notifications


def get_social_service(
    container: ServiceContainer = Depends(get_container),
) -> SocialActionService:
    return container.social


def resolve_current_account_id(token: str | None) -> int:
    """Resolve the acting account for the provided bearer token."""

    if not token:
        raise UnauthenticatedError(detail="missing bearer token")
    try:
        return resolve_account_id(token)
    except ValueError as exc:
        raise UnauthenticatedError(detail=str(exc)) from exc


def get_current_account_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int:
    """Return the id of the authenticated account."""

    token = credentials.credentials if credentials is not None else None
    return resolve_current_account_id(token)


def parse_identifier(raw: str, label: str = "id") -> int:
    """Parse a path identifier, rejecting anything that is not a positive integer."""

    if not (raw.isascii() and raw.isdigit()) or int(raw) <= 0:
        raise InvalidOperationError(f"invalid {label}", detail=f"{label}={raw!r}")
    return int(raw)
