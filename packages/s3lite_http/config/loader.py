"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) ~/.config/s3lite/s3lite.yaml
4) Model defaults

Environment variable format:
- Prefix: ``S3LITE_``
- Nested keys: ``__`` separator
- Example: ``S3LITE_HTTP__TIMEOUT_SECONDS=5`` -> ``http.timeout_seconds = 5.0``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import DEFAULT_CONFIG_PATH, S3LiteSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> S3LiteSettings:
    """Resolve settings, reading YAML from ``config_path`` when given."""
    resolved_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if resolved_path == S3LiteSettings._config_path:
        return S3LiteSettings(**dict(cli_params or {}))

    class _PathSettings(S3LiteSettings):
        _config_path: ClassVar[Path] = resolved_path

    return _PathSettings(**dict(cli_params or {}))
