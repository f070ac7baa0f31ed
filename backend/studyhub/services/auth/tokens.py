# studyhub/services/auth/tokens.py
"""
TokenService
============

Issues, verifies and rotates the two session tokens:

- **access**: ``{id, username, email, fullName, exp}``, minutes-scale,
  stateless to verify.
- **refresh**: ``{id, exp, jti}``, days-scale, and persisted in the user's
  single refresh-token slot. A refresh token is honoured only while it is
  the value held in that slot, which is what makes renewal revocable.

Per-user session states: anonymous → authenticated → access expired
(rotate) → logged out (slot cleared). Rotating with anything but the
current slot value fails with :class:`RefreshMismatchError`, so one refresh
token at most is valid per user.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any
from uuid import uuid4

from studyhub.services._shared.base import BaseService
from studyhub.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    PrincipalNotFoundError,
    RefreshMismatchError,
    TokenExpiredError,
    TokenInvalidError,
)
from studyhub.services._shared.ports.credential_store import CredentialStore
from studyhub.services._shared.ports.token_provider import TokenProvider
from studyhub.services.auth.dto import (
    AccessClaims,
    AuthTokenConfig,
    Principal,
    TokenPairOut,
)

logger = logging.getLogger(__name__)

REFRESH_REJECTED = "Invalid or expired Refresh Token"


class TokenService(BaseService):
    """
    Session token lifecycle service.

    :param token_provider: Adapter signing/verifying JWTs.
    :param credential_store: Principal lookup and refresh-slot persistence.
    :param token_cfg: Access/refresh lifetimes (15 minutes / 10 days by default).
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        credential_store: CredentialStore,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        super().__init__()
        self.tokens = token_provider
        self.store = credential_store
        self.cfg = token_cfg or AuthTokenConfig(
            access_expires=timedelta(minutes=15),
            refresh_expires=timedelta(days=10),
        )

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_access_token(self, principal: Principal) -> str:
        """Sign an access token for ``principal``. No store access."""
        claims: dict[str, Any] = {
            "id": principal.id,
            "username": principal.username,
            "email": principal.email,
            "fullName": principal.full_name,
        }
        return self.tokens.encode_access(claims, expires_delta=self.cfg.access_expires)

    def issue_refresh_token(self, principal: Principal) -> str:
        """
        Sign a refresh token and store it in the principal's slot.

        Any refresh token issued earlier for this user stops being valid.

        :raises PrincipalNotFoundError: If the user no longer exists.
        """
        token = self._encode_refresh(principal.id)
        if not self.store.set_refresh_token(principal.id, token):
            raise PrincipalNotFoundError()
        return token

    def issue_pair(self, principal: Principal) -> TokenPairOut:
        access = self.issue_access_token(principal)
        refresh = self.issue_refresh_token(principal)
        logger.info("Token pair issued", extra={"user_id": principal.id})
        return TokenPairOut(access_token=access, refresh_token=refresh)

    def _encode_refresh(self, user_id: int) -> str:
        # ``jti`` keeps two tokens minted in the same second distinct.
        claims = {"id": user_id, "jti": uuid4().hex}
        return self.tokens.encode_refresh(claims, expires_delta=self.cfg.refresh_expires)

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def verify_access(self, token: str) -> AccessClaims:
        """
        Verify signature and expiry of an access token.

        :raises TokenExpiredError: When ``exp`` has passed.
        :raises TokenInvalidError: On bad signature or missing claims.
        """
        payload = self.tokens.decode_access(token)
        try:
            return AccessClaims(
                id=self._coerce_user_id(payload["id"]),
                username=str(payload["username"]),
                email=str(payload["email"]),
                full_name=str(payload.get("fullName") or ""),
                exp=int(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TokenInvalidError() from exc

    def authenticate(self, token: str) -> Principal:
        """
        Resolve an access token to its current principal.

        :raises AuthenticationError: Any token failure or a deleted user.
        :raises AuthorizationError: When the user is blocked.
        """
        claims = self.verify_access(token)
        principal = self.store.get_principal(claims.id)
        if principal is None:
            raise PrincipalNotFoundError()
        if principal.is_blocked:
            raise AuthorizationError("Your account has been blocked")
        return principal

    # ------------------------------------------------------------------ #
    # Rotation / revocation
    # ------------------------------------------------------------------ #

    def rotate(self, refresh_token: str | None) -> TokenPairOut:
        """
        Exchange the current refresh token for a fresh pair.

        The new refresh token replaces the slot only if the slot still holds
        ``refresh_token`` (atomic compare-and-set), so a stale, logged-out or
        already-rotated token can never be rotated, even before it expires.

        :raises AuthenticationError: When no token is provided.
        :raises TokenExpiredError: When the refresh token has expired.
        :raises TokenInvalidError: On bad signature or shape.
        :raises PrincipalNotFoundError: When the user no longer exists.
        :raises RefreshMismatchError: When the token is not the stored one.
        """
        if not refresh_token:
            raise AuthenticationError("Unauthorized request")

        try:
            payload = self.tokens.decode_refresh(refresh_token)
            user_id = self._coerce_user_id(payload["id"])
        except TokenExpiredError as exc:
            raise TokenExpiredError(REFRESH_REJECTED) from exc
        except (TokenInvalidError, KeyError, TypeError, ValueError) as exc:
            raise TokenInvalidError(REFRESH_REJECTED) from exc

        principal = self.store.get_principal(user_id)
        if principal is None:
            raise PrincipalNotFoundError(REFRESH_REJECTED)

        new_access = self.issue_access_token(principal)
        new_refresh = self._encode_refresh(principal.id)
        if not self.store.swap_refresh_token(principal.id, refresh_token, new_refresh):
            logger.warning("Refresh token rejected: slot mismatch", extra={"user_id": principal.id})
            raise RefreshMismatchError()

        logger.info("Refresh token rotated", extra={"user_id": principal.id})
        return TokenPairOut(access_token=new_access, refresh_token=new_refresh)

    def revoke(self, user_id: int) -> None:
        """Clear the user's refresh slot, invalidating every refresh token."""
        self.store.set_refresh_token(user_id, None)
        logger.info("Refresh slot cleared", extra={"user_id": user_id})

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def _coerce_user_id(subject: Any) -> int:
        """Ensure the ``id`` claim can be treated as an integer user id."""
        if isinstance(subject, bool):
            raise TokenInvalidError()
        if isinstance(subject, int):
            return subject
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        raise TokenInvalidError()
