"""Error taxonomy shared by the trigger, fan-out and notification layers.

Every error carries two tiers of information: an :class:`ErrorCode` plus a
public message that is safe to return to clients, and an internal ``detail``
that is only ever written to the logs.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable, client-facing error categories."""

    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_OPERATION = "invalid_operation"
    CONFLICT = "conflict"
    INTERNAL = "internal_error"


class SocialError(Exception):
    """Base class for errors raised by the application use cases."""

    code: ErrorCode = ErrorCode.INTERNAL
    default_message = "internal server error"

    def __init__(self, message: str | None = None, *, detail: str | None = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class NotFoundError(SocialError):
    """A referenced post, account or notification does not exist."""

    code = ErrorCode.NOT_FOUND
    default_message = "resource not found"


class UnauthenticatedError(SocialError):
    """The request carries no valid actor identity."""

    code = ErrorCode.UNAUTHENTICATED
    default_message = "authentication required"


class InvalidOperationError(SocialError):
    """The operation is not allowed, e.g. following yourself or a malformed id."""

    code = ErrorCode.INVALID_OPERATION
    default_message = "invalid operation"


class ConflictError(SocialError):
    """A uniqueness conflict that could not be absorbed."""

    code = ErrorCode.CONFLICT
    default_message = "conflict"


class InternalError(SocialError):
    """Store failures and expired deadlines."""

    code = ErrorCode.INTERNAL


__all__ = [
    "ErrorCode",
    "SocialError",
    "NotFoundError",
    "UnauthenticatedError",
    "InvalidOperationError",
    "ConflictError",
    "InternalError",
]
