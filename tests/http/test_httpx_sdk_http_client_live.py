"""Adapter tests against a local HTTP/1.1 server over real sockets."""

from __future__ import annotations

import io
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import h11
import httpx
import pytest

from packages.s3lite_http.httpx_client import HttpxSdkHttpClient
from packages.s3lite_http.spi import (
    HttpMethod,
    HttpRequestError,
    ImmutableRequest,
    RequestBody,
)


@dataclass
class _Received:
    """What the server saw for one request."""

    method: str
    path: str
    body: bytes


@dataclass
class _LocalServer:
    endpoint: str
    received: list[_Received] = field(default_factory=list)


class _RecordingHandler(BaseHTTPRequestHandler):
    """Record the raw request line target and body, then answer 200."""

    def _record(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.received.append(  # type: ignore[attr-defined]
            _Received(method=self.command, path=self.path, body=body)
        )
        if len(body) < length:
            self.close_connection = True
            return
        payload = b"ok"
        self.send_response(200)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = _record
    do_PUT = _record
    do_DELETE = _record

    def log_message(self, format: str, *args: object) -> None:
        pass


@pytest.fixture
def local_server() -> Iterator[_LocalServer]:
    """Serve on an ephemeral loopback port for one test."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _RecordingHandler)
    server.daemon_threads = True
    state = _LocalServer(endpoint=f"http://127.0.0.1:{server.server_address[1]}")
    server.received = state.received  # type: ignore[attr-defined]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield state
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


def _client() -> HttpxSdkHttpClient:
    return HttpxSdkHttpClient.custom_client(httpx.Client(timeout=5.0))


@pytest.mark.parametrize(
    "resource_path",
    ["/bucket/a/../b", "/bucket/./c", "/bucket/dir/./../key"],
)
def test_dot_segments_reach_the_server_unchanged(
    local_server: _LocalServer, resource_path: str
) -> None:
    """The request line should carry the key exactly as built."""
    with _client() as client:
        with client.apply(
            ImmutableRequest(
                method=HttpMethod.GET,
                endpoint=local_server.endpoint,
                resource_path=resource_path,
                parameters={"versionId": ["v1"]},
            )
        ) as response:
            assert response.status is HTTPStatus.OK
            assert response.body is not None
            assert response.body.read() == b"ok"

    assert local_server.received[0].path == f"{resource_path}?versionId=v1"


def test_put_longer_stream_is_cut_at_declared_length(
    local_server: _LocalServer,
) -> None:
    """Only the declared number of bytes should be written to the socket."""
    with _client() as client:
        with client.apply(
            ImmutableRequest(
                method=HttpMethod.PUT,
                endpoint=local_server.endpoint,
                resource_path="/bucket/key",
                body=RequestBody(
                    content_length=5,
                    content_stream_provider=lambda: io.BytesIO(b"0123456789"),
                ),
            )
        ) as response:
            assert response.status is HTTPStatus.OK

    assert local_server.received[0].method == "PUT"
    assert local_server.received[0].body == b"01234"


def test_put_shorter_stream_fails_as_request_error(
    local_server: _LocalServer,
) -> None:
    """A stream ending before its declared length should fail as typed error."""
    with _client() as client:
        with pytest.raises(HttpRequestError) as exc_info:
            client.apply(
                ImmutableRequest(
                    method=HttpMethod.PUT,
                    endpoint=local_server.endpoint,
                    resource_path="/bucket/key",
                    body=RequestBody(
                        content_length=10,
                        content_stream_provider=lambda: io.BytesIO(b"01234"),
                    ),
                )
            )

    error = exc_info.value
    assert error.method == "PUT"
    assert error.url == f"{local_server.endpoint}/bucket/key"
    assert error.retryable is False
    assert isinstance(error.cause, h11.LocalProtocolError)
