"""User repository for persistence, credential checks and the refresh slot."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select, update

from studyhub.models.user import Role, User
from studyhub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It stores and compares the refresh-token slot but never creates or
    decodes tokens itself.
    """

    model = User

    # ---------------------------- Whitelists ----------------------------

    def _filterable_fields(self):
        return {
            "email": User.email,
            "username": User.username,
            "role": User.role,
        }

    def _updatable_fields(self):
        """Publicly allowed updatable fields (not including password or slot)."""
        return {"email", "full_name", "bio", "avatar", "cover_image"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    def exists_by_username(self, username: str) -> bool:
        stmt = select(User.id).where(User.username == username.lower().strip())
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Password ops ----------------------------

    def update_password(self, user: User, new_password: str) -> None:
        """Assign a new raw password (hashed by the model) and flush."""
        user.password = new_password
        self.flush()

    def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a user by email and password.

        :returns: Authenticated user or ``None`` when credentials fail.
        :rtype: User | None
        """
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user

    # ---------------------------- Refresh slot ----------------------------

    def set_refresh_token(self, user_id: int, token: str | None) -> bool:
        """Overwrite the refresh slot unconditionally.

        :returns: ``True`` if the user row exists.
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=token)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1

    def swap_refresh_token(self, user_id: int, expected: str, new: str) -> bool:
        """Replace the slot only if it still holds ``expected``.

        A single conditional ``UPDATE``: of two concurrent rotations of the
        same token, exactly one matches the row.

        :returns: ``True`` when the swap happened.
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=new)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1

    # ---------------------------- Moderation ----------------------------

    def set_blocked(self, user_id: int, blocked: bool) -> bool:
        """Flip the block flag. :returns: ``True`` if the user row exists."""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(is_blocked=blocked)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1

    def set_role(self, user_id: int, role: Role) -> bool:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(role=role)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1
