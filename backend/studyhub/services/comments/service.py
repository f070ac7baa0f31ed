from __future__ import annotations

import logging

from studyhub.models.comment import Comment
from studyhub.repositories.comment import CommentRepository
from studyhub.services._shared.base import BaseService
from studyhub.services._shared.errors import NotFoundError, ValidationError

from .dto import CommentAuthorOut, CommentOut

logger = logging.getLogger(__name__)

MIN_LENGTH = 3
MAX_LENGTH = 1000
NOT_AUTHOR = "Comment not found or you are not the author"


def comment_to_out(row: Comment) -> CommentOut:
    return CommentOut(
        id=row.id,
        resource_id=row.resource_id,
        comment=row.comment,
        author=CommentAuthorOut(
            full_name=row.user.full_name,
            username=row.user.username,
            avatar=row.user.avatar,
        ),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _clean(text: str | None) -> str:
    value = (text or "").strip()
    if not MIN_LENGTH <= len(value) <= MAX_LENGTH:
        raise ValidationError(f"Comment must be between {MIN_LENGTH} and {MAX_LENGTH} characters")
    return value


class CommentService(BaseService):
    """Comments on visible resources. Only the author edits or deletes."""

    def add(self, resource_id: int, text: str) -> CommentOut:
        body = _clean(text)
        user_id = self.ensure_actor()
        with self.rw_uow() as uow:
            if uow.resources.get_visible(resource_id) is None:
                raise NotFoundError("Resource", resource_id)
            row = uow.comments.add(Comment(user_id=user_id, resource_id=resource_id, comment=body))
            logger.info("Comment added", extra={"resource_id": resource_id, "user_id": user_id})
            return comment_to_out(row)

    def edit(self, resource_id: int, comment_id: int, text: str) -> CommentOut:
        body = _clean(text)
        user_id = self.ensure_actor()
        with self.rw_uow() as uow:
            repo: CommentRepository = uow.comments
            if uow.resources.get_visible(resource_id) is None:
                raise NotFoundError("Resource", resource_id)
            row = repo.get_authored(comment_id, user_id)
            if row is None or row.resource_id != resource_id:
                raise NotFoundError("Comment", comment_id, NOT_AUTHOR)
            repo.update(row, comment=body)
            return comment_to_out(row)

    def delete(self, resource_id: int, comment_id: int) -> None:
        user_id = self.ensure_actor()
        with self.rw_uow() as uow:
            repo: CommentRepository = uow.comments
            if uow.resources.get_visible(resource_id) is None:
                raise NotFoundError("Resource", resource_id)
            row = repo.get_authored(comment_id, user_id)
            if row is None or row.resource_id != resource_id:
                raise NotFoundError("Comment", comment_id, NOT_AUTHOR)
            repo.delete(row)
            logger.info("Comment deleted", extra={"resource_id": resource_id, "user_id": user_id})

    def list(self, resource_id: int) -> list[CommentOut]:
        """Visible comments of a visible resource, newest first."""
        with self.ro_uow() as uow:
            if uow.resources.get_visible(resource_id) is None:
                raise NotFoundError("Resource", resource_id)
            return [comment_to_out(row) for row in uow.comments.list_for_resource(resource_id)]
