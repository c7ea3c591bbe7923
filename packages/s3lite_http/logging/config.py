"""Stdout logging configuration for s3lite HTTP clients."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from packages.s3lite_http.config import LoggingSettings

from . import fields
from .context import get_context

# Request fields lead plain-text suffixes in this order.
_REQUEST_FIELDS = (fields.HTTP_METHOD, fields.URL, fields.STATUS_CODE, fields.ENGINE)


class ContextFilter(logging.Filter):
    """Attach process-wide and request-scoped fields to each record."""

    def __init__(self, static_fields: Mapping[str, str] | None = None) -> None:
        super().__init__()
        self._static_fields = dict(static_fields or {})

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = {**self._static_fields, **get_context()}
        return True


class JsonFormatter(logging.Formatter):
    """Emit newline-delimited JSON logs; ``status_code`` stays numeric."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            fields.TIMESTAMP: datetime.now(UTC).isoformat(),
            fields.LEVEL: record.levelname,
            fields.LOGGER: record.name,
            fields.MESSAGE: record.getMessage(),
        }
        payload.update(_record_context(record))
        if fields.STATUS_CODE in payload:
            payload[fields.STATUS_CODE] = int(payload[fields.STATUS_CODE])
        if record.exc_info:
            payload[fields.EXCEPTION] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Human-readable lines with request fields first, then the rest sorted."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = _record_context(record)
        if not context:
            return message
        ordered = [key for key in _REQUEST_FIELDS if key in context]
        ordered += sorted(key for key in context if key not in _REQUEST_FIELDS)
        suffix = " ".join(f"{key}={context[key]}" for key in ordered)
        return f"{message} {suffix}"


def _record_context(record: logging.LogRecord) -> dict[str, str]:
    context = getattr(record, "context", None)
    return dict(context) if isinstance(context, dict) else {}


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Install a single stdout handler on the root logger.

    Existing root handlers are replaced, so repeated calls never duplicate
    emissions. ``service`` and ``environment`` are stamped on every record.
    """
    settings = settings or LoggingSettings()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(settings.level)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(settings.level)
    handler.addFilter(
        ContextFilter(
            {
                fields.SERVICE: settings.service,
                fields.ENVIRONMENT: settings.environment,
            }
        )
    )
    handler.setFormatter(JsonFormatter() if settings.json_output else PlainFormatter())
    root.addHandler(handler)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger using Python's standard logging hierarchy."""
    return logging.getLogger(name)
