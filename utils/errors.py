"""
Domain exceptions raised by the stores and the auth layer.

Routes translate these into ``HTTPException`` with a fixed status code; the
messages carried here are safe to show to clients.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for every expected, client-facing failure."""


class ValidationError(AppError):
    """Missing or malformed input."""


class DuplicateIdentity(AppError):
    """An account with this email already exists."""


class AuthenticationFailure(AppError):
    """Email/password pair did not match a stored account."""


class MissingCredential(AppError):
    """No bearer token was presented."""


class InvalidCredential(AppError):
    """A bearer token was presented but did not verify."""


class NotFound(AppError):
    """The record does not exist for the caller."""


class UpstreamError(AppError):
    """The translation API failed or could not be reached."""

    def __init__(self, message: str, *, configured: bool = True) -> None:
        super().__init__(message)
        self.configured = configured


class StoreUnavailable(AppError):
    """The database could not be reached at startup."""
