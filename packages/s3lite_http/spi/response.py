"""Transport-agnostic response model produced by ``SdkHttpClient``."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import BinaryIO

from .request import MultiValueMap, freeze_multi_map
from .status import is_success
from .utils import first_header, header_values


@dataclass(frozen=True)
class ImmutableResponse:
    """One HTTP response with an optional, caller-owned body stream."""

    status: HTTPStatus
    headers: MultiValueMap = field(default_factory=dict)
    body: BinaryIO | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", freeze_multi_map(self.headers))

    @property
    def is_success(self) -> bool:
        return is_success(self.status)

    def header(self, name: str) -> tuple[str, ...]:
        """Return all values for ``name``, matched case-insensitively."""
        return header_values(self.headers, name)

    def first_header(self, name: str) -> str | None:
        return first_header(self.headers, name)

    def close(self) -> None:
        """Close the body stream, releasing the underlying connection."""
        if self.body is not None:
            self.body.close()

    def __enter__(self) -> ImmutableResponse:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
