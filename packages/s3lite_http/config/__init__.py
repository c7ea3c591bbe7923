"""Public API for s3lite configuration utilities."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    HttpEngineSettings,
    LoggingSettings,
    S3LiteSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "HttpEngineSettings",
    "LoggingSettings",
    "S3LiteSettings",
    "load_settings",
]
