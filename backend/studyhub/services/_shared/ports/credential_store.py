from __future__ import annotations

from typing import Protocol

from studyhub.services.auth.dto import Principal


class CredentialStore(Protocol):
    """
    Persistence port for principals and their single refresh-token slot.

    The slot holds at most one token per user. ``swap_refresh_token`` MUST be
    atomic: it replaces the slot only when it still equals ``expected``.
    """

    def get_principal(self, user_id: int) -> Principal | None:
        """Load the user without secret fields, or ``None`` when gone."""

    def set_refresh_token(self, user_id: int, token: str | None) -> bool:
        """Overwrite (or clear with ``None``) the slot. :returns: ``True`` if the user exists."""

    def swap_refresh_token(self, user_id: int, expected: str, new: str) -> bool:
        """Compare-and-set the slot. :returns: ``True`` when it held ``expected``."""
