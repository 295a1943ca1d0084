"""Exception hierarchy for configly.

All exceptions inherit from :class:`ConfiglyError`, which carries a
``kind`` attribute taken from :class:`ErrorKind`, the human-readable
``message`` and the ``original_cause`` (the transport exception or HTTP
response that triggered the failure, if any).  Callers can branch on
``exc.kind`` without importing every subclass.

Subclass hierarchy::

    ConfiglyError
    +-- InvalidArgumentError     (INVALID_ARGUMENT)
    |   +-- ConfigError          (INVALID_ARGUMENT)
    +-- InvalidCredentialError   (INVALID_CREDENTIAL)
    +-- ConnectionFailureError   (CONNECTION_FAILURE)
    +-- ServerError              (SERVER_ERROR)
    +-- StateError               (INVALID_STATE)
"""

from __future__ import annotations

import enum
from typing import Any, Optional


class ErrorKind(str, enum.Enum):
    """Classification attached to every :class:`ConfiglyError`."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    """A key was missing, not a string, or empty; or the client was misconfigured."""

    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    """The server rejected the API key (HTTP 401)."""

    CONNECTION_FAILURE = "CONNECTION_FAILURE"
    """The server could not be reached, or the request timed out."""

    SERVER_ERROR = "SERVER_ERROR"
    """Any other non-success response from the server."""

    INVALID_STATE = "INVALID_STATE"
    """The process-wide client was initialised twice, or used before init."""


class ConfiglyError(Exception):
    """Base exception for all configly errors.

    Every subclass sets a class-level ``kind``.

    Args:
        message: Human-readable error description.
        original_cause: The underlying exception or response, if any.
    """

    kind: ErrorKind = ErrorKind.SERVER_ERROR

    def __init__(self, message: str, original_cause: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.original_cause = original_cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class InvalidArgumentError(ConfiglyError):
    """Raised when ``get`` receives a key that is not a non-empty string."""

    kind = ErrorKind.INVALID_ARGUMENT


class ConfigError(InvalidArgumentError):
    """Raised for configuration problems (missing API key, bad env values)."""


class InvalidCredentialError(ConfiglyError):
    """Raised when the server rejects the API key."""

    kind = ErrorKind.INVALID_CREDENTIAL


class ConnectionFailureError(ConfiglyError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused)."""

    kind = ErrorKind.CONNECTION_FAILURE


class ServerError(ConfiglyError):
    """Raised for any other non-2xx response or an unreadable response body."""

    kind = ErrorKind.SERVER_ERROR


class StateError(ConfiglyError):
    """Raised when the process-wide client is initialised twice or used before init."""

    kind = ErrorKind.INVALID_STATE
