"""
studyhub.services._shared.ports
===============================

*Ports* (hexagonal interfaces) the token lifecycle depends on.

- :mod:`token_provider`: :class:`~.TokenProvider`, signing and verification
  of access and refresh tokens.
- :mod:`credential_store`: :class:`~.CredentialStore`, principal lookup and
  the refresh-token slot.

Concrete adapters live under ``studyhub.infra``.
"""

from __future__ import annotations

from .credential_store import CredentialStore
from .token_provider import TokenProvider

__all__ = [
    "CredentialStore",
    "TokenProvider",
]
