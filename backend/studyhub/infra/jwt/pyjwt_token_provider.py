# studyhub/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from studyhub.services._shared.errors import TokenExpiredError, TokenInvalidError
from studyhub.services._shared.ports import TokenProvider


@dataclass(slots=True)
class PyJWTTokenProvider(TokenProvider):
    """
    HMAC JWT adapter built on PyJWT.

    :param access_secret: Key for access tokens.
    :param refresh_secret: Key for refresh tokens; must differ from ``access_secret``.
    :param algorithm: HMAC algorithm (``HS256`` by default).
    :param leeway: Clock-skew tolerance applied to ``exp``.
    """

    access_secret: str
    refresh_secret: str
    algorithm: str = "HS256"
    leeway: timedelta = timedelta(seconds=0)

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Both token secrets must be configured.")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh tokens need distinct secrets.")

    @classmethod
    def from_config(cls, config: Any) -> PyJWTTokenProvider:
        """Build the provider from a Flask config mapping."""
        return cls(
            access_secret=config["ACCESS_TOKEN_SECRET"],
            refresh_secret=config["REFRESH_TOKEN_SECRET"],
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
        )

    # ------------------------------ encode ------------------------------

    def _encode(self, claims: dict[str, Any], secret: str, expires_delta: timedelta) -> str:
        payload = dict(claims)
        payload["exp"] = datetime.now(UTC) + expires_delta
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def encode_access(self, claims: dict[str, Any], *, expires_delta: timedelta) -> str:
        return self._encode(claims, self.access_secret, expires_delta)

    def encode_refresh(self, claims: dict[str, Any], *, expires_delta: timedelta) -> str:
        return self._encode(claims, self.refresh_secret, expires_delta)

    # ------------------------------ decode ------------------------------

    def _decode(self, token: str, secret: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
                leeway=self.leeway,
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidTokenError as exc:
            raise TokenInvalidError() from exc

    def decode_access(self, token: str) -> dict[str, Any]:
        return self._decode(token, self.access_secret)

    def decode_refresh(self, token: str) -> dict[str, Any]:
        return self._decode(token, self.refresh_secret)
