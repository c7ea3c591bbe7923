"""Pure helpers shared by ``SdkHttpClient`` implementations."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import IO
from urllib.parse import quote

from packages.s3lite_http.logging import get_logger

_LOGGER = get_logger(__name__)

# RFC 3986 unreserved characters besides alphanumerics.
_UNRESERVED = "-_.~"


def url_encode(value: str) -> str:
    """Percent-encode one query name or value per RFC 3986."""
    return quote(value, safe=_UNRESERVED)


def to_query_string(parameters: Mapping[str, Sequence[str]]) -> str:
    """Encode multi-valued query parameters in insertion order.

    Each value yields one ``name=value`` pair; a name without values is
    emitted bare. Returns an empty string when there is nothing to encode.
    """
    pairs: list[str] = []
    for name, values in parameters.items():
        encoded_name = url_encode(name)
        if not values:
            pairs.append(encoded_name)
            continue
        pairs.extend(f"{encoded_name}={url_encode(value)}" for value in values)
    return "&".join(pairs)


def header_values(
    headers: Mapping[str, Sequence[str]], name: str
) -> tuple[str, ...]:
    """Return values for a header name matched case-insensitively."""
    wanted = name.lower()
    for key, values in headers.items():
        if key.lower() == wanted:
            return tuple(values)
    return ()


def first_header(headers: Mapping[str, Sequence[str]], name: str) -> str | None:
    """Return the first value of a header, or ``None`` when absent."""
    values = header_values(headers, name)
    return values[0] if values else None


def close_quietly(stream: IO[bytes] | None) -> None:
    """Close ``stream`` if present, logging and discarding close failures."""
    if stream is None:
        return
    try:
        stream.close()
    except Exception as exc:  # noqa: BLE001
        _LOGGER.debug("Ignoring stream close failure: %s", exc, exc_info=exc)
