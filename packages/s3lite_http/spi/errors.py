"""Typed errors raised by ``SdkHttpClient`` implementations.

Each error carries the request method and URL it relates to plus a
``retryable`` hint so callers can separate transient transport failures from
usage and input mistakes that will fail again unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpError(Exception):
    """Base error type for s3lite HTTP failures."""

    message: str

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


@dataclass(frozen=True)
class HttpClientError(HttpError):
    """Base error for one outbound request translation or execution."""

    method: str
    url: str
    retryable: bool = False


@dataclass(frozen=True)
class UnsupportedMethodError(HttpClientError):
    """Request method is outside the set the client can execute."""


@dataclass(frozen=True)
class MalformedRequestError(HttpClientError):
    """Endpoint, resource path and query do not form a valid URL."""

    cause: Exception | None = None


@dataclass(frozen=True)
class HttpRequestError(HttpClientError):
    """Transport-level failure while executing a request."""

    cause: Exception | None = None


@dataclass(frozen=True)
class UnknownStatusCodeError(HttpClientError):
    """Response status code has no ``HTTPStatus`` counterpart."""

    status_code: int = 0
