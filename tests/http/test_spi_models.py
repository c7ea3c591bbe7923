"""Unit tests for the transport-agnostic request/response models."""

from __future__ import annotations

import io
from http import HTTPStatus
from pathlib import Path

import pytest

from packages.s3lite_http.spi import (
    HttpMethod,
    ImmutableRequest,
    ImmutableResponse,
    RequestBody,
    from_status_code,
)


def test_request_freezes_mappings_into_tuples() -> None:
    """Request mappings should be read-only and hold tuples of values."""
    parameters = {"prefix": ["logs/"]}
    request = ImmutableRequest(
        method="GET",  # type: ignore[arg-type]
        endpoint="http://h",
        parameters=parameters,
        headers={"Host": "h", "X": ["a", "b"]},
    )
    parameters["prefix"].append("late")

    assert request.method is HttpMethod.GET
    assert request.parameters["prefix"] == ("logs/",)
    assert request.headers["Host"] == ("h",)
    assert request.headers["X"] == ("a", "b")
    with pytest.raises(TypeError):
        request.headers["Y"] = ("c",)  # type: ignore[index]


def test_builder_appends_values_per_name() -> None:
    """Builder parameter/header calls should accumulate values in order."""
    body = RequestBody.from_bytes(b"data")
    request = (
        ImmutableRequest.builder()
        .method(HttpMethod.PUT)
        .endpoint("http://h")
        .resource_path("/bucket/key")
        .parameter("tagging")
        .header("x-amz-meta-a", "1")
        .header("x-amz-meta-a", "2")
        .body(body)
        .build()
    )

    assert request == ImmutableRequest(
        method=HttpMethod.PUT,
        endpoint="http://h",
        resource_path="/bucket/key",
        parameters={"tagging": []},
        headers={"x-amz-meta-a": ["1", "2"]},
        body=body,
    )


def test_builder_requires_method_and_endpoint() -> None:
    """Building without method or endpoint should fail fast."""
    with pytest.raises(ValueError, match="method"):
        ImmutableRequest.builder().endpoint("http://h").build()
    with pytest.raises(ValueError, match="endpoint"):
        ImmutableRequest.builder().method("GET").build()


def test_request_body_provider_yields_fresh_streams() -> None:
    """Each provider call should return an independent stream."""
    body = RequestBody.from_string("héllo")
    first = body.content_stream_provider()
    first.read()

    assert body.content_length == len("héllo".encode("utf-8"))
    assert body.content_stream_provider().read() == "héllo".encode("utf-8")
    assert RequestBody.empty().content_length == 0


def test_request_body_from_file_streams_file(tmp_path: Path) -> None:
    """File bodies should size from the file and reopen it per call."""
    path = tmp_path / "object.bin"
    path.write_bytes(b"\x00\x01\x02")
    body = RequestBody.from_file(path)

    with body.content_stream_provider() as stream:
        assert stream.read() == b"\x00\x01\x02"
    assert body.content_length == 3


def test_request_body_rejects_negative_length() -> None:
    """Declared content lengths must not be negative."""
    with pytest.raises(ValueError, match="non-negative"):
        RequestBody(content_length=-1, content_stream_provider=io.BytesIO)


def test_response_header_lookup_is_case_insensitive() -> None:
    """Response helpers should find headers regardless of name casing."""
    response = ImmutableResponse(
        status=HTTPStatus.OK,
        headers={"ETag": ['"abc"'], "x-amz-meta-a": ["1", "2"]},
    )

    assert response.header("etag") == ('"abc"',)
    assert response.first_header("X-AMZ-META-A") == "1"
    assert response.first_header("missing") is None
    assert response.header("missing") == ()
    assert response.is_success


def test_response_context_manager_closes_body() -> None:
    """Leaving the response context should close its body."""
    body = io.BytesIO(b"payload")
    with ImmutableResponse(status=HTTPStatus.NOT_FOUND, body=body) as response:
        assert not response.is_success

    assert body.closed


def test_from_status_code_maps_known_and_rejects_unknown() -> None:
    """Known codes map to HTTPStatus; unknown codes raise ValueError."""
    assert from_status_code(200) is HTTPStatus.OK
    assert from_status_code(503) is HTTPStatus.SERVICE_UNAVAILABLE
    with pytest.raises(ValueError, match="599"):
        from_status_code(599)
