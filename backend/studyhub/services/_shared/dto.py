# comments in English; reST docstrings strict
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PageMeta:
    """
    Output pagination metadata.

    :param total_items: Total rows matching the query.
    :type total_items: int
    :param total_pages: ``ceil(total_items / limit)``.
    :type total_pages: int
    :param current_page: Page that was requested (1-based).
    :type current_page: int
    :param limit: Page size actually applied.
    :type limit: int
    """

    total_items: int
    total_pages: int
    current_page: int
    limit: int

    @classmethod
    def build(cls, *, total: int, page: int, limit: int) -> PageMeta:
        return cls(
            total_items=total,
            total_pages=math.ceil(total / limit) if limit else 0,
            current_page=page,
            limit=limit,
        )
