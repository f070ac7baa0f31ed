from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class CommentAuthorOut:
    full_name: str
    username: str
    avatar: str | None


@dataclass(frozen=True, slots=True)
class CommentOut:
    """Visible comment with its author."""

    id: int
    resource_id: int
    comment: str
    author: CommentAuthorOut
    created_at: datetime | None
    updated_at: datetime | None
