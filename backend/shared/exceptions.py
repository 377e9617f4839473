"""
Error hierarchy shared by every Listkeeper module.

Module exceptions subclass one of these bases; the API layer renders any
``ListkeeperError`` as ``{"error": code, "detail": message}`` with the
class's ``status_code``.
"""

from typing import Any, Optional


class ListkeeperError(Exception):
    """Root of the hierarchy; unhandled subclasses surface as 500."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        # Stable machine-readable identifier, e.g. "TOKEN_EXPIRED"
        self.code = code if code is not None else type(self).__name__
        self.details: dict[str, Any] = dict(details) if details else {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(ListkeeperError):
    status_code = 400


class AuthenticationError(ListkeeperError):
    status_code = 401


class NotFoundError(ListkeeperError):
    status_code = 404


class ConflictError(ListkeeperError):
    """The write collides with data that already exists."""

    status_code = 409


class ConstraintError(ConflictError):
    """An integrity rule beyond plain uniqueness, e.g. one primary email per account."""


class StateError(ListkeeperError):
    """The resource exists but its current state forbids the operation."""

    status_code = 409


class RateLimitError(ListkeeperError):
    status_code = 429
