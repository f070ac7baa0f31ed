# studyhub/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated user as seen by the gates. Carries no secrets.

    :param id: User identifier.
    :param username: Public handle.
    :param email: Login email.
    :param full_name: Display name.
    :param role: ``"user"`` or ``"admin"``.
    :param avatar: Avatar URL.
    :param is_blocked: Moderation flag.
    """

    id: int
    username: str
    email: str
    full_name: str
    role: str
    avatar: str | None = None
    is_blocked: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @classmethod
    def from_user(cls, user) -> Principal:
        """Project a ``User`` row onto a secret-free principal."""
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            role=getattr(user.role, "value", user.role),
            avatar=user.avatar,
            is_blocked=user.is_blocked,
        )


@dataclass(frozen=True, slots=True)
class AccessClaims:
    """
    Verified access-token payload.

    :param id: Principal id.
    :param username: Username at issuance.
    :param email: Email at issuance.
    :param full_name: Display name at issuance.
    :param exp: Expiry as a UNIX timestamp.
    """

    id: int
    username: str
    email: str
    full_name: str
    exp: int


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta
    refresh_expires: timedelta
