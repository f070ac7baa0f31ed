"""Resource use cases: query building, discovery and owner commands."""

from .command import ResourceCommandService
from .discovery import ResourceDiscoveryService
from .query import ResourceQueryBuilder

__all__ = [
    "ResourceCommandService",
    "ResourceDiscoveryService",
    "ResourceQueryBuilder",
]
