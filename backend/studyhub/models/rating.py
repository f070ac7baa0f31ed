"""Rating model: one score per (user, resource) pair."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin

if TYPE_CHECKING:
    from .resource import Resource
    from .user import User

MIN_RATING = 1
MAX_RATING = 5


class Rating(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    Score given by a user to a resource.

    The ``uq_ratings_user_resource`` constraint is what guarantees at most
    one row per pair; re-rating goes through an upsert keyed on it.
    """

    __tablename__ = "ratings"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    resource_id: Mapped[int] = mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"), nullable=False
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "resource_id", name="uq_ratings_user_resource"),
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}", name="rating_range"
        ),
        Index("ix_ratings_resource_id", "resource_id"),
    )

    user: Mapped[User] = relationship("User", back_populates="ratings")
    resource: Mapped[Resource] = relationship("Resource", back_populates="ratings")
