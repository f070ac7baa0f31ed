"""Comment repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from studyhub.models.comment import Comment
from studyhub.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Persistence-only repository for :class:`Comment`."""

    model = Comment

    def _updatable_fields(self):
        return {"comment"}

    def get_authored(self, comment_id: int, user_id: int) -> Comment | None:
        """Return the comment only if ``user_id`` wrote it."""
        stmt = select(Comment).where(Comment.id == comment_id, Comment.user_id == user_id)
        return cast(Comment | None, self.session.execute(stmt).scalars().first())

    def list_for_resource(self, resource_id: int) -> list[Comment]:
        """Visible comments of a resource with their authors, newest first."""
        stmt = (
            select(Comment)
            .options(joinedload(Comment.user))
            .where(Comment.resource_id == resource_id, Comment.is_blocked.is_(False))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())
