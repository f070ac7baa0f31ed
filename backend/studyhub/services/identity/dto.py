"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from studyhub.services.auth.dto import TokenPairOut

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for user registration.

    :param full_name: Display name.
    :param email: Login email (normalized to lowercase by the model).
    :param username: Public handle (normalized to lowercase by the model).
    :param password: Raw password to be hashed by the model.
    :param avatar: Avatar URL, as returned by the file storage.
    :param cover_image: Optional cover image URL.
    """

    full_name: str
    email: str
    username: str
    password: str
    avatar: str
    cover_image: str | None = None


@dataclass(frozen=True, slots=True)
class UserAuthIn:
    """
    Input DTO for authentication.

    :param email: Login email.
    :type email: str
    :param password: Raw password.
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for account details; ``None`` leaves a field unchanged.

    :param full_name: Optional new display name.
    :param email: Optional new email.
    :param bio: Optional new bio.
    """

    full_name: str | None = None
    email: str | None = None
    bio: str | None = None


@dataclass(frozen=True, slots=True)
class UserPasswordChangeIn:
    """
    Input DTO for changing a user's password.

    :param user_id: User identifier.
    :type user_id: int
    :param old_password: Current password.
    :type old_password: str
    :param new_password: New password (raw).
    :type new_password: str
    """

    user_id: int
    old_password: str
    new_password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user data (no password hash, no refresh slot).
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str | None
    bio: str
    role: str
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class UserProfileOut:
    """
    Public profile looked up by username.

    :param resource_count: Number of visible resources the user shared.
    """

    username: str
    full_name: str
    avatar: str
    cover_image: str | None
    bio: str
    resource_count: int
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Result of a successful login.

    :param user: Logged-in user.
    :param tokens: Freshly issued access/refresh pair.
    """

    user: UserPublicOut
    tokens: TokenPairOut
