"""Request-scoped logging context for HTTP client calls.

Fields bound here ride along on every log line emitted while one request is
in flight, so the adapter never repeats method and URL at each call site.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

from . import fields

_LOG_CONTEXT: ContextVar[dict[str, str]] = ContextVar(
    "s3lite_log_context", default={}
)


def get_context() -> dict[str, str]:
    """Return a shallow copy of current logging context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Bind values into the current context; ``None`` values are skipped."""
    current = _LOG_CONTEXT.get().copy()
    current.update(
        {key: str(value) for key, value in values.items() if value is not None}
    )
    _LOG_CONTEXT.set(current)


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Temporarily bind logging context for the duration of a block."""
    token = _LOG_CONTEXT.set(_LOG_CONTEXT.get().copy())
    try:
        bind_context(**dict(values))
        yield
    finally:
        _LOG_CONTEXT.reset(token)


@contextmanager
def request_context(*, method: str, url: str, engine: str) -> Iterator[None]:
    """Scope request fields to one in-flight HTTP call."""
    with log_context(
        {fields.HTTP_METHOD: method, fields.URL: url, fields.ENGINE: engine}
    ):
        yield


def bind_response(status_code: int) -> None:
    """Attach the response status to the enclosing request context."""
    bind_context(**{fields.STATUS_CODE: status_code})
