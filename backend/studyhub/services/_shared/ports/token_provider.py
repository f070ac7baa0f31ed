from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for signing and verifying the two token kinds.

    Access and refresh tokens are signed with different secrets; a token of
    one kind never verifies as the other. ``decode_*`` raise
    :class:`~studyhub.services._shared.errors.TokenExpiredError` when the
    ``exp`` claim has passed and
    :class:`~studyhub.services._shared.errors.TokenInvalidError` for any
    other signature or shape problem.
    """

    def encode_access(self, claims: dict[str, Any], *, expires_delta: timedelta) -> str: ...

    def encode_refresh(self, claims: dict[str, Any], *, expires_delta: timedelta) -> str: ...

    def decode_access(self, token: str) -> dict[str, Any]: ...

    def decode_refresh(self, token: str) -> dict[str, Any]: ...
