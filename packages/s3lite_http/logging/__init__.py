"""Public logging API for s3lite HTTP clients.

This package wraps Python's ``logging`` module with stdout defaults and
request-scoped context propagation.
"""

from .config import (
    ContextFilter,
    JsonFormatter,
    PlainFormatter,
    configure_logging,
    get_logger,
)
from .context import (
    bind_context,
    bind_response,
    get_context,
    log_context,
    request_context,
)

__all__ = [
    "bind_context",
    "bind_response",
    "configure_logging",
    "ContextFilter",
    "get_context",
    "get_logger",
    "JsonFormatter",
    "log_context",
    "PlainFormatter",
    "request_context",
]
