"""Status code mapping into the closed ``HTTPStatus`` enumeration."""

from __future__ import annotations

from http import HTTPStatus


def from_status_code(status_code: int) -> HTTPStatus:
    """Return the ``HTTPStatus`` member for one numeric status code.

    Raises ``ValueError`` when the code is not a member of the enumeration.
    """
    try:
        return HTTPStatus(status_code)
    except ValueError:
        raise ValueError(f"Unknown HTTP status code: {status_code}") from None


def is_success(status: HTTPStatus) -> bool:
    """Return whether ``status`` is in the 2xx class."""
    return 200 <= status.value < 300
