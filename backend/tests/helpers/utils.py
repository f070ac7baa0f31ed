"""Assertion helpers shared across test modules."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any

SUCCESS_KEYS = {"statusCode", "message", "data", "success"}
ERROR_KEYS = {"statusCode", "message", "error", "success"}


@contextmanager
def not_raises(exception: type[BaseException]):
    """Fail the test if ``exception`` escapes the managed block."""
    try:
        yield
    except exception as exc:  # pragma: no cover
        raise AssertionError(f"Did raise {exception}: {exc}") from exc


def envelope(resp, status: int) -> dict[str, Any]:
    """Assert ``resp`` carries the response envelope for ``status`` and return it.

    Successful responses expose ``data``; failures expose an ``error`` list.
    """
    body = resp.get_json()
    assert resp.status_code == status, body
    assert body["statusCode"] == status
    assert body["success"] is (status < 400)
    expected = SUCCESS_KEYS if status < 400 else ERROR_KEYS
    assert expected <= set(body)
    return body
