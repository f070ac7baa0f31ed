"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from studyhub.repositories.base import (
    BaseRepository,
    Page,
    paginate_select,
)
from studyhub.repositories.comment import CommentRepository
from studyhub.repositories.rating import RatingRepository
from studyhub.repositories.resource import ResourceRepository
from studyhub.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "paginate_select",
    # Domain
    "UserRepository",
    "ResourceRepository",
    "RatingRepository",
    "CommentRepository",
]
