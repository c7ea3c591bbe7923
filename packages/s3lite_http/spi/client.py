"""Engine-neutral client contract for higher-level API logic."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .request import ImmutableRequest
from .response import ImmutableResponse


@runtime_checkable
class SdkHttpClient(Protocol):
    """Execute abstract requests on some HTTP engine.

    Implementations must allow concurrent ``apply`` calls and release engine
    resources exactly once in ``close``.
    """

    def apply(self, request: ImmutableRequest) -> ImmutableResponse:
        """Execute one request and return its adapted response."""

    def close(self) -> None:
        """Release engine resources."""
