"""Comment model attached to a resource."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .resource import Resource
    from .user import User


class Comment(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Free-text comment (3 to 1000 characters) written by a user."""

    __tablename__ = "comments"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    resource_id: Mapped[int] = mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"), nullable=False
    )
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    is_blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_comments_resource_id", "resource_id"),)

    user: Mapped[User] = relationship("User", back_populates="comments")
    resource: Mapped[Resource] = relationship("Resource", back_populates="comments")
