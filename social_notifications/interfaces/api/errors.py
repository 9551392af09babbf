"""Translation of application errors into HTTP responses."""

from __future__ import annotations

import logging
from typing import Final

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from social_notifications.domain.errors import ErrorCode, SocialError

logger = logging.getLogger(__name__)

# HTTP status plus the message clients see when the error carries none of its own.
ERROR_RESPONSES: Final[dict[ErrorCode, tuple[int, str]]] = {
    ErrorCode.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "resource not found"),
    ErrorCode.UNAUTHENTICATED: (status.HTTP_401_UNAUTHORIZED, "authentication required"),
    ErrorCode.INVALID_OPERATION: (status.HTTP_400_BAD_REQUEST, "invalid operation"),
    ErrorCode.CONFLICT: (status.HTTP_409_CONFLICT, "conflict"),
    ErrorCode.INTERNAL: (status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error"),
}


def error_payload(error: SocialError) -> tuple[int, dict[str, str]]:
    """Return the status code and public body for ``error``."""

    status_code, fallback = ERROR_RESPONSES.get(
        error.code, ERROR_RESPONSES[ErrorCode.INTERNAL]
    )
    if error.code is ErrorCode.INTERNAL:
        message = fallback
    else:
        message = error.message or fallback
    return status_code, {"code": error.code.value, "detail": message}


async def handle_social_error(request: Request, exc: SocialError) -> JSONResponse:
    status_code, body = error_payload(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    headers = {"WWW-Authenticate": "Bearer"} if exc.code is ErrorCode.UNAUTHENTICATED else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s malformed request: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"code": ErrorCode.INVALID_OPERATION.value, "detail": "malformed request"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SocialError, handle_social_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)


__all__ = [
    "ERROR_RESPONSES",
    "error_payload",
    "register_exception_handlers",
]
