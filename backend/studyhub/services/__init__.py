"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`studyhub.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``studyhub.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Session tokens (from ``studyhub.services.auth``)
    * :class:`TokenService`

- Use-case services
    * :class:`IdentityService`
    * :class:`ResourceQueryBuilder`, :class:`ResourceDiscoveryService`,
      :class:`ResourceCommandService`
    * :class:`RatingService`
    * :class:`CommentService`
    * :class:`AdminService`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext
from ._shared.dto import PageMeta
from .admin import AdminService
from .auth.tokens import TokenService
from .comments import CommentService
from .identity.service import IdentityService
from .ratings import RatingService
from .resources import (
    ResourceCommandService,
    ResourceDiscoveryService,
    ResourceQueryBuilder,
)

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    "PageMeta",
    # Tokens
    "TokenService",
    # Use cases
    "IdentityService",
    "ResourceQueryBuilder",
    "ResourceDiscoveryService",
    "ResourceCommandService",
    "RatingService",
    "CommentService",
    "AdminService",
]
