from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from studyhub.models.resource import Branch
from studyhub.services._shared.dto import PageMeta

# ------------------------------ Input DTOs ------------------------------ #


@dataclass(frozen=True, slots=True)
class ResourceQueryIn:
    """
    Raw discovery parameters as received from the client.

    Every field is optional and unvalidated; see
    :class:`~studyhub.services.resources.query.ResourceQueryBuilder`.
    """

    search_text: str | None = None
    semester: str | int | None = None
    branch: str | None = None
    page: str | int | None = None
    limit: str | int | None = None


@dataclass(frozen=True, slots=True)
class ResourceFilter:
    """
    Validated discovery filter. Blocked resources are always excluded.

    :param semester: Semester in ``[1, 8]`` or ``None`` for any.
    :param branch: Department or ``None`` for any.
    :param search_text: Trimmed title substring, matched literally.
    :param page: 1-based page number.
    :param limit: Page size, within ``[1, max_limit]``.
    """

    semester: int | None
    branch: Branch | None
    search_text: str | None
    page: int
    limit: int


@dataclass(frozen=True, slots=True)
class ResourceCreateIn:
    title: str
    description: str
    semester: int
    branch: str
    url: str
    file_size: int | None = None


@dataclass(frozen=True, slots=True)
class ResourceUpdateIn:
    resource_id: int
    title: str
    description: str


# ------------------------------ Output DTOs ------------------------------ #


@dataclass(frozen=True, slots=True)
class OwnerOut:
    """Owner fields exposed next to a resource; ``None`` values when deleted."""

    full_name: str | None
    username: str | None
    avatar: str | None


@dataclass(frozen=True, slots=True)
class ResourceOut:
    """
    Public projection of a resource.

    :param average_rating: Unrounded mean, ``None`` while nobody rated it.
    :param total_ratings: Number of stored ratings.
    """

    id: int
    title: str
    description: str
    semester: int
    branch: str
    url: str
    file_size: int | None
    owner_id: int | None
    owner: OwnerOut
    average_rating: float | None
    total_ratings: int
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class ResourceListOut:
    items: list[ResourceOut]
    meta: PageMeta
