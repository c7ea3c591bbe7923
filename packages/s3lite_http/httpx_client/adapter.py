"""``SdkHttpClient`` implementation executing requests on ``httpx``."""

from __future__ import annotations

from collections.abc import Iterator
from http import HTTPStatus
from typing import BinaryIO

import h11
import httpx

from packages.s3lite_http.config import HttpEngineSettings
from packages.s3lite_http.logging import bind_response, get_logger, request_context
from packages.s3lite_http.spi import (
    HttpMethod,
    HttpRequestError,
    ImmutableRequest,
    ImmutableResponse,
    MalformedRequestError,
    MultiValueMap,
    UnknownStatusCodeError,
    UnsupportedMethodError,
    close_quietly,
    first_header,
    from_status_code,
    to_query_string,
)

from .stream import ResponseBodyStream

_LOGGER = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
ENGINE_NAME = "httpx"
_NO_ENTITY_STATUS_CODES = frozenset({204, 304})
_UPLOAD_CHUNK_SIZE = 64 * 1024


class HttpxSdkHttpClient:
    """Adapt abstract requests to ``httpx`` calls and back.

    ``httpx.Client`` is thread safe, so one instance should be shared across
    threads and reused for many requests. The instance owns its engine and
    closes it in ``close``.
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def default_client(
        cls, settings: HttpEngineSettings | None = None
    ) -> HttpxSdkHttpClient:
        """Build a client over a new ``httpx.Client`` configured by settings."""
        settings = settings or HttpEngineSettings()
        return cls(
            httpx.Client(
                timeout=httpx.Timeout(
                    settings.timeout_seconds,
                    connect=settings.connect_timeout_seconds,
                ),
                follow_redirects=settings.follow_redirects,
                limits=httpx.Limits(
                    max_connections=settings.max_connections,
                    max_keepalive_connections=settings.max_keepalive_connections,
                    keepalive_expiry=settings.keepalive_expiry_seconds,
                ),
            )
        )

    @classmethod
    def custom_client(cls, client: httpx.Client) -> HttpxSdkHttpClient:
        """Wrap a caller-configured ``httpx.Client``."""
        return cls(client)

    def apply(self, request: ImmutableRequest) -> ImmutableResponse:
        """Execute one request; only GET, PUT and DELETE are supported."""
        method = request.method
        if method is HttpMethod.GET or method is HttpMethod.DELETE:
            return self._execute(_build_request(request))
        if method is HttpMethod.PUT:
            return self._put(request)
        raise UnsupportedMethodError(
            message=f"{method.value} not yet supported",
            method=method.value,
            url=request.endpoint + request.resource_path,
        )

    def close(self) -> None:
        """Close the underlying engine and its connection pool."""
        self._client.close()

    def __enter__(self) -> HttpxSdkHttpClient:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def _put(self, request: ImmutableRequest) -> ImmutableResponse:
        """Execute a PUT, streaming the request body when one is attached."""
        content_type = first_header(request.headers, "content-type")
        content_type = content_type.strip() if content_type else DEFAULT_CONTENT_TYPE
        content: BinaryIO | None = None
        try:
            if request.body is None:
                wire_request = _build_request(request)
            else:
                content = request.body.content_stream_provider()
                wire_request = _build_request(
                    request,
                    content=content,
                    content_length=request.body.content_length,
                    content_type=content_type,
                )
            return self._execute(wire_request)
        finally:
            close_quietly(content)

    def _execute(self, wire_request: httpx.Request) -> ImmutableResponse:
        """Send one wire request and adapt the wire response."""
        url = _wire_url(wire_request)
        with request_context(method=wire_request.method, url=url, engine=ENGINE_NAME):
            _LOGGER.debug("HTTP request dispatched")
            try:
                response = self._client.send(
                    wire_request,
                    stream=True,
                    follow_redirects=_redirect_policy(wire_request),
                )
            except (httpx.RequestError, h11.LocalProtocolError) as exc:
                _LOGGER.warning(
                    "HTTP request failed: exception_type=%s", type(exc).__name__
                )
                raise HttpRequestError(
                    message=f"HTTP request failed for {wire_request.method} {url}",
                    method=wire_request.method,
                    url=url,
                    retryable=isinstance(exc, httpx.TransportError),
                    cause=exc,
                ) from exc

            bind_response(response.status_code)
            _LOGGER.debug("HTTP response received")
            return _adapt_response(response, url)


def _build_request(
    request: ImmutableRequest,
    *,
    content: BinaryIO | None = None,
    content_length: int = 0,
    content_type: str | None = None,
) -> httpx.Request:
    """Build the wire request; entity headers are set only with content.

    The request target is pinned to the path and query exactly as assembled,
    so dot segments and escapes in object keys reach the server untouched.
    """
    url, target = _request_url(request)
    headers = _wire_headers(request.headers)
    body: Iterator[bytes] | None = None
    if content is not None:
        headers["Content-Length"] = str(content_length)
        headers.setdefault("Content-Type", content_type or DEFAULT_CONTENT_TYPE)
        body = _bounded_chunks(content, content_length)
    extensions = {} if target == url.raw_path else {"target": target}
    return httpx.Request(
        request.method.value,
        url,
        headers=headers,
        content=body,
        extensions=extensions,
    )


def _bounded_chunks(stream: BinaryIO, length: int) -> Iterator[bytes]:
    """Yield at most ``length`` bytes from ``stream``."""
    remaining = length
    while remaining > 0:
        chunk = stream.read(min(_UPLOAD_CHUNK_SIZE, remaining))
        if not chunk:
            return
        remaining -= len(chunk)
        yield chunk


def _request_url(request: ImmutableRequest) -> tuple[httpx.URL, bytes]:
    """Join endpoint, path and encoded query; return URL and raw target."""
    raw = request.endpoint + request.resource_path
    query = to_query_string(request.parameters)
    if query:
        raw = f"{raw}?{query}"

    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise MalformedRequestError(
            message=f"Invalid request URL: {raw}",
            method=request.method.value,
            url=raw,
            cause=exc,
        ) from exc

    if not url.scheme or not url.host:
        raise MalformedRequestError(
            message=f"Request URL must be absolute: {raw}",
            method=request.method.value,
            url=raw,
        )

    target = _raw_target(raw)
    if not target.isascii() or any(char.isspace() for char in target):
        raise MalformedRequestError(
            message=f"Request target must be percent-encoded ASCII: {raw}",
            method=request.method.value,
            url=raw,
        )
    return url, target.encode("ascii")


def _raw_target(raw: str) -> str:
    """Return everything after the authority of an absolute URL string."""
    authority_start = raw.index("://") + 3
    ends = [
        index
        for index in (raw.find("/", authority_start), raw.find("?", authority_start))
        if index != -1
    ]
    target = raw[min(ends) :] if ends else ""
    target = target.partition("#")[0]
    return target if target.startswith("/") else f"/{target}"


def _redirect_policy(wire_request: httpx.Request):
    """Never follow redirects for a pinned target.

    httpx copies request extensions onto redirect requests, so a pinned
    target would be resent to the redirect location's host unchanged.
    """
    if "target" in wire_request.extensions:
        return False
    return httpx.USE_CLIENT_DEFAULT


def _wire_url(wire_request: httpx.Request) -> str:
    """Render the URL as sent, using the pinned target instead of the path."""
    url = wire_request.url
    target = wire_request.extensions.get("target", url.raw_path)
    return f"{url.scheme}://{url.netloc.decode('ascii')}{target.decode('ascii')}"


def _wire_headers(headers: MultiValueMap) -> httpx.Headers:
    """Join multi-valued headers with commas, skipping ``content-length``.

    The engine derives the length from the attached content instead.
    """
    wire = httpx.Headers()
    for name, values in headers.items():
        if name.lower() != "content-length":
            wire[name] = ",".join(values)
    return wire


def _adapt_response(response: httpx.Response, url: str) -> ImmutableResponse:
    """Map status, headers and body of a streamed wire response."""
    try:
        status = from_status_code(response.status_code)
    except ValueError:
        response.close()
        raise UnknownStatusCodeError(
            message=f"Unknown HTTP status code {response.status_code}",
            method=response.request.method,
            url=url,
            status_code=response.status_code,
        ) from None

    headers = _fold_headers(response.headers)
    if _has_entity(status):
        body: BinaryIO | None = ResponseBodyStream(response)
    else:
        response.close()
        body = None
    return ImmutableResponse(status=status, headers=headers, body=body)


def _has_entity(status: HTTPStatus) -> bool:
    """Return whether a response with ``status`` can carry a body.

    A zero-length body still counts; it reads as ``b""``.
    """
    return status >= 200 and status.value not in _NO_ENTITY_STATUS_CODES


def _fold_headers(headers: httpx.Headers) -> dict[str, tuple[str, ...]]:
    """Group raw header pairs by name, keeping arrival order per name."""
    folded: dict[str, tuple[str, ...]] = {}
    for name, value in _decoded_pairs(headers):
        folded[name] = folded.get(name, ()) + (value,)
    return folded


def _decoded_pairs(headers: httpx.Headers) -> Iterator[tuple[str, str]]:
    for raw_name, raw_value in headers.raw:
        yield raw_name.decode(headers.encoding), raw_value.decode(headers.encoding)
