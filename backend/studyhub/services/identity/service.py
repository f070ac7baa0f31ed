"""
IdentityService
===============

Aggregate service responsible for managing the `User` aggregate:
- Registration and account details
- Password lifecycle
- Login/logout, delegating token work to :class:`TokenService`
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from studyhub.models.user import User
from studyhub.repositories.user import UserRepository
from studyhub.services._shared.base import BaseService, ServiceContext
from studyhub.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
    violates,
)
from studyhub.services.auth.dto import Principal
from studyhub.services.auth.tokens import TokenService
from studyhub.services.identity.dto import (
    LoginOut,
    UserAuthIn,
    UserPasswordChangeIn,
    UserProfileOut,
    UserPublicOut,
    UserRegisterIn,
    UserUpdateIn,
)

logger = logging.getLogger(__name__)

DUPLICATE_USER = "User with email or username already exists"


def user_to_out(user: User) -> UserPublicOut:
    return UserPublicOut(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar=user.avatar,
        cover_image=user.cover_image,
        bio=user.bio,
        role=user.role.value,
        created_at=user.created_at,
    )


class IdentityService(BaseService):
    """
    Application service for the `User` aggregate.

    :param tokens: Token lifecycle service; required for login/logout only.
    :param ctx: Request-scoped context.
    """

    def __init__(self, *, tokens: TokenService | None = None, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.tokens = tokens

    def _require_tokens(self) -> TokenService:
        if self.tokens is None:
            raise RuntimeError("IdentityService needs a TokenService for session operations.")
        return self.tokens

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register(self, dto: UserRegisterIn) -> UserPublicOut:
        """
        Register a new user with role ``user``.

        :param dto: User registration input DTO.
        :returns: Public-safe user DTO.
        :raises ConflictError: When the email or username is taken.
        """
        if not dto.avatar:
            raise ValidationError("Avatar file is required")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(dto.email) or repo.exists_by_username(dto.username):
                raise ConflictError("User", DUPLICATE_USER)

            try:
                user = repo.add(
                    User(
                        full_name=dto.full_name.strip(),
                        email=dto.email,
                        username=dto.username,
                        password=dto.password,  # model hashes via setter
                        avatar=dto.avatar,
                        cover_image=dto.cover_image or None,
                    )
                )
            except IntegrityError as exc:
                if violates(exc, "uq_users_email") or violates(exc, "uq_users_username"):
                    raise ConflictError("User", DUPLICATE_USER) from exc
                raise

            logger.info("User registered", extra={"user_id": user.id})
            return user_to_out(user)

    # --------------------------------------------------------------------- #
    # Session
    # --------------------------------------------------------------------- #

    def login(self, dto: UserAuthIn) -> LoginOut:
        """
        Verify credentials and issue a fresh token pair.

        :raises AuthenticationError: When email/password do not match.
        :raises AuthorizationError: When the account is blocked.
        """
        tokens = self._require_tokens()
        with self.ro_uow() as uow:
            user = uow.users.authenticate(dto.email, dto.password)
            if user is None:
                raise AuthenticationError("Invalid user credentials")
            if user.is_blocked:
                raise AuthorizationError("Your account has been blocked")
            principal = Principal.from_user(user)
            out = user_to_out(user)

        pair = tokens.issue_pair(principal)
        logger.info("User logged in", extra={"user_id": principal.id})
        return LoginOut(user=out, tokens=pair)

    def logout(self, user_id: int) -> None:
        """Clear the refresh slot; outstanding refresh tokens stop working."""
        self._require_tokens().revoke(user_id)

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_user(self, user_id: int) -> UserPublicOut:
        """
        :raises NotFoundError: If user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return user_to_out(user)

    def get_profile(self, username: str) -> UserProfileOut:
        """Public profile by username, with the count of visible resources."""
        if not username or not username.strip():
            raise ValidationError("Username is missing")
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(username)
            if user is None:
                raise NotFoundError("User", username, "User not found")
            return UserProfileOut(
                username=user.username,
                full_name=user.full_name,
                avatar=user.avatar,
                cover_image=user.cover_image,
                bio=user.bio,
                resource_count=uow.resources.count_by_owner(user.id),
                created_at=user.created_at,
            )

    # --------------------------------------------------------------------- #
    # Update account details
    # --------------------------------------------------------------------- #

    def update_account(self, user_id: int, dto: UserUpdateIn) -> UserPublicOut:
        """
        Update full name, email and/or bio.

        :raises ValidationError: When no field is provided.
        :raises ConflictError: When the new email is taken.
        """
        updates: dict[str, Any] = {
            k: v
            for k, v in {"full_name": dto.full_name, "email": dto.email, "bio": dto.bio}.items()
            if v is not None
        }
        if not updates:
            raise ValidationError("At least one field is required")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            try:
                repo.update(user, **updates)
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "Email already in use") from exc
                raise
            return user_to_out(user)

    # --------------------------------------------------------------------- #
    # Password management
    # --------------------------------------------------------------------- #

    def change_password(self, dto: UserPasswordChangeIn) -> None:
        """
        Change a user's password after verifying the old one.

        :raises NotFoundError: When user not found.
        :raises ValidationError: When old password verification fails.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(dto.user_id)
            if user is None:
                raise NotFoundError("User", dto.user_id)
            if not user.verify_password(dto.old_password):
                raise ValidationError("Invalid old password")
            repo.update_password(user, dto.new_password)
            logger.info("Password changed", extra={"user_id": user.id})
