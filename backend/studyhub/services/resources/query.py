"""
ResourceQueryBuilder
====================

Turns raw discovery parameters into a validated :class:`ResourceFilter`.

Rules
-----
- ``semester``: optional, must parse to an integer in ``[1, 8]``.
- ``branch``: optional, must be one of :class:`~studyhub.models.resource.Branch`
  (case-insensitive).
- ``search_text``: optional, trimmed; blank means "no search". The
  repository matches it as a literal, case-insensitive title substring.
- ``page`` / ``limit``: coerced to positive integers; ``limit`` is capped at
  ``max_limit`` and ``page`` may not exceed ``MAX_PAGE``. Values that are
  not ASCII integers are rejected.

The builder performs no I/O.
"""

from __future__ import annotations

from typing import Any

from studyhub.models.resource import MAX_SEMESTER, MIN_SEMESTER, Branch
from studyhub.services._shared.errors import ValidationError

from .dto import ResourceFilter, ResourceQueryIn

INVALID_SEMESTER = "Semester must be a number between 1 and 8"
INVALID_BRANCH = "Invalid branch provided"
INVALID_PAGE = "Page must be a positive integer"
# Keeps (page - 1) * limit inside a signed 64-bit OFFSET.
MAX_PAGE = 10**9


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_int(value: Any, *, message: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.startswith(("+", "-")):
        digits = text[1:]
    else:
        digits = text
    if not (digits.isascii() and digits.isdigit()):
        raise ValidationError(message)
    return int(text)


class ResourceQueryBuilder:
    """
    Validate discovery parameters.

    :param default_limit: Page size used when ``limit`` is absent.
    :param max_limit: Upper bound applied to ``limit``.
    """

    def __init__(self, *, default_limit: int = 10, max_limit: int = 100) -> None:
        self.default_limit = default_limit
        self.max_limit = max_limit

    def build(self, raw: ResourceQueryIn) -> ResourceFilter:
        """
        :raises ValidationError: On an out-of-range semester, unknown branch
            or non-numeric page/limit.
        """
        return ResourceFilter(
            semester=self._semester(raw.semester),
            branch=self._branch(raw.branch),
            search_text=self._search_text(raw.search_text),
            page=self._page(raw.page),
            limit=self._limit(raw.limit),
        )

    # ------------------------------------------------------------------ #

    @staticmethod
    def _semester(value: Any) -> int | None:
        if _is_blank(value):
            return None
        semester = _parse_int(value, message=INVALID_SEMESTER)
        if not MIN_SEMESTER <= semester <= MAX_SEMESTER:
            raise ValidationError(INVALID_SEMESTER)
        return semester

    @staticmethod
    def _branch(value: Any) -> Branch | None:
        if _is_blank(value):
            return None
        try:
            return Branch.parse(value)
        except ValueError as exc:
            raise ValidationError(INVALID_BRANCH) from exc

    @staticmethod
    def _search_text(value: Any) -> str | None:
        if _is_blank(value):
            return None
        return str(value).strip()

    def _page(self, value: Any) -> int:
        if _is_blank(value):
            return 1
        page = _parse_int(value, message=INVALID_PAGE)
        if page > MAX_PAGE:
            raise ValidationError(f"Page must not exceed {MAX_PAGE}")
        return max(1, page)

    def _limit(self, value: Any) -> int:
        if _is_blank(value):
            return self.default_limit
        limit = _parse_int(value, message="Limit must be a positive integer")
        return min(max(1, limit), self.max_limit)
