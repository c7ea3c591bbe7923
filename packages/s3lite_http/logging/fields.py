"""Canonical logging field names for s3lite HTTP clients.

Structured log lines and bound context use these keys so request logs from
different engines share one shape.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EXCEPTION = "exception"

# Request/response fields.
HTTP_METHOD = "http_method"
URL = "url"
STATUS_CODE = "status_code"
ENGINE = "engine"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
