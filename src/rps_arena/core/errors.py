"""Error taxonomy shared by services and the HTTP layer.

Every error carries the HTTP status it maps to and a short client-facing
message. The handlers in `rps_arena.main` turn them into `{"error": ...}`
JSON bodies.
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    """Base class for all foreseeable application failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(AppError):
    """No identity exists for the supplied mobile number."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User not found"


class ExpiredError(AppError):
    """The pending one-time code has expired."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "OTP expired"


class MismatchError(AppError):
    """The presented one-time code does not match the pending one."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid OTP"


class AuthError(AppError):
    """Missing, malformed, forged or expired bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class InternalError(AppError):
    """Store failure or other unexpected condition."""


__all__ = [
    "AppError",
    "AuthError",
    "ExpiredError",
    "InternalError",
    "MismatchError",
    "NotFoundError",
    "ValidationError",
]
