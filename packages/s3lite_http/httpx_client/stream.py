"""File-like view over a streamed ``httpx`` response body."""

from __future__ import annotations

import io

import httpx

from packages.s3lite_http.spi import HttpRequestError


class ResponseBodyStream(io.RawIOBase):
    """Read-only byte stream over a streamed response.

    Content-encoding is decoded while reading. Closing the stream closes the
    response and returns its connection to the pool.
    """

    def __init__(self, response: httpx.Response) -> None:
        super().__init__()
        self._response = response
        self._chunks = response.iter_bytes()
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray | memoryview) -> int:  # type: ignore[override]
        if self.closed:
            raise ValueError("I/O operation on closed response body")
        while not self._pending:
            chunk = self._next_chunk()
            if chunk is None:
                return 0
            self._pending = chunk
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size

    def close(self) -> None:
        if not self.closed:
            self._response.close()
        super().close()

    def _next_chunk(self) -> bytes | None:
        try:
            return next(self._chunks)
        except StopIteration:
            return None
        except httpx.RequestError as exc:
            request = self._response.request
            raise HttpRequestError(
                message=f"Reading response body failed for {request.method} {request.url}",
                method=request.method,
                url=str(request.url),
                retryable=isinstance(exc, httpx.TransportError),
                cause=exc,
            ) from exc
