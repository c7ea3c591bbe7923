"""Transport-agnostic request model consumed by ``SdkHttpClient``."""

from __future__ import annotations

import io
import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO

MultiValueMap = Mapping[str, tuple[str, ...]]


class HttpMethod(str, Enum):
    """HTTP request methods known to the request model."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True)
class RequestBody:
    """Request payload with a declared length and a reopenable stream.

    ``content_stream_provider`` returns a fresh stream on every call; the
    caller owns and closes each stream it obtains.
    """

    content_length: int
    content_stream_provider: Callable[[], BinaryIO]

    def __post_init__(self) -> None:
        if self.content_length < 0:
            raise ValueError(
                f"content_length must be non-negative, got {self.content_length}"
            )

    @classmethod
    def empty(cls) -> RequestBody:
        """Return a zero-length body."""
        return cls.from_bytes(b"")

    @classmethod
    def from_bytes(cls, data: bytes) -> RequestBody:
        """Return a body reading from an in-memory copy of ``data``."""
        payload = bytes(data)
        return cls(
            content_length=len(payload),
            content_stream_provider=lambda: io.BytesIO(payload),
        )

    @classmethod
    def from_string(cls, text: str, encoding: str = "utf-8") -> RequestBody:
        """Return a body holding ``text`` encoded with ``encoding``."""
        return cls.from_bytes(text.encode(encoding))

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> RequestBody:
        """Return a body streaming a file, sized from its current length."""
        resolved = Path(path)
        return cls(
            content_length=resolved.stat().st_size,
            content_stream_provider=lambda: resolved.open("rb"),
        )


def freeze_multi_map(
    values: Mapping[str, str | Iterable[str]] | None,
) -> MultiValueMap:
    """Copy a name-to-values mapping into a read-only mapping of tuples.

    A bare string value counts as a single value.
    """
    frozen: dict[str, tuple[str, ...]] = {}
    for name, raw in (values or {}).items():
        if isinstance(raw, str):
            frozen[name] = (raw,)
        else:
            frozen[name] = tuple(raw)
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class ImmutableRequest:
    """One HTTP request described independently of any transport engine."""

    method: HttpMethod
    endpoint: str
    resource_path: str = ""
    parameters: MultiValueMap = field(default_factory=dict)
    headers: MultiValueMap = field(default_factory=dict)
    body: RequestBody | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod(self.method))
        object.__setattr__(self, "parameters", freeze_multi_map(self.parameters))
        object.__setattr__(self, "headers", freeze_multi_map(self.headers))

    @staticmethod
    def builder() -> RequestBuilder:
        """Return a fluent builder for one request."""
        return RequestBuilder()


class RequestBuilder:
    """Fluent, mutable builder producing ``ImmutableRequest`` values."""

    def __init__(self) -> None:
        self._method: HttpMethod | None = None
        self._endpoint: str | None = None
        self._resource_path = ""
        self._parameters: dict[str, list[str]] = {}
        self._headers: dict[str, list[str]] = {}
        self._body: RequestBody | None = None

    def method(self, method: HttpMethod | str) -> RequestBuilder:
        self._method = HttpMethod(method)
        return self

    def endpoint(self, endpoint: str) -> RequestBuilder:
        self._endpoint = endpoint
        return self

    def resource_path(self, resource_path: str) -> RequestBuilder:
        self._resource_path = resource_path
        return self

    def parameter(self, name: str, *values: str) -> RequestBuilder:
        """Append values under a query parameter name."""
        self._parameters.setdefault(name, []).extend(values)
        return self

    def header(self, name: str, *values: str) -> RequestBuilder:
        """Append values under a header name."""
        self._headers.setdefault(name, []).extend(values)
        return self

    def body(self, body: RequestBody | None) -> RequestBuilder:
        self._body = body
        return self

    def build(self) -> ImmutableRequest:
        """Return the request; method and endpoint are required."""
        if self._method is None:
            raise ValueError("request method is required")
        if not self._endpoint:
            raise ValueError("request endpoint is required")
        return ImmutableRequest(
            method=self._method,
            endpoint=self._endpoint,
            resource_path=self._resource_path,
            parameters=self._parameters,
            headers=self._headers,
            body=self._body,
        )
