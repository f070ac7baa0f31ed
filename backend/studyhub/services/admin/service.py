"""
AdminService
============

Moderation use cases reachable only behind the ``admin`` role gate.
"""

from __future__ import annotations

import logging

from studyhub.repositories.user import UserRepository
from studyhub.services._shared.base import BaseService
from studyhub.services._shared.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class AdminService(BaseService):
    """User deletion and block flags for users and resources."""

    def delete_user(self, user_id: int) -> None:
        """
        Delete a user together with their resources, ratings and comments.

        :raises ValidationError: When an admin targets their own account.
        :raises NotFoundError: When the user does not exist.
        """
        if self.ctx.actor_id is not None and self.ctx.actor_id == user_id:
            raise ValidationError("Administrators cannot delete their own account")
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id, "User not found")
            repo.delete(user)
            logger.info("User deleted", extra={"user_id": user_id})

    def set_resource_blocked(self, resource_id: int, blocked: bool) -> None:
        """:raises NotFoundError: When the resource does not exist."""
        with self.rw_uow() as uow:
            if not uow.resources.set_blocked(resource_id, blocked):
                raise NotFoundError("Resource", resource_id)
            logger.info(
                "Resource blocked" if blocked else "Resource unblocked",
                extra={"resource_id": resource_id},
            )

    def set_user_blocked(self, user_id: int, blocked: bool) -> None:
        """
        Flip a user's block flag. Blocking also clears the refresh slot, so
        the user's session cannot be renewed.

        :raises NotFoundError: When the user does not exist.
        """
        if blocked and self.ctx.actor_id is not None and self.ctx.actor_id == user_id:
            raise ValidationError("Administrators cannot block their own account")
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if not repo.set_blocked(user_id, blocked):
                raise NotFoundError("User", user_id, "User not found")
            if blocked:
                repo.set_refresh_token(user_id, None)
            logger.info(
                "User blocked" if blocked else "User unblocked", extra={"user_id": user_id}
            )
