from __future__ import annotations

from typing import Any

from studyhub.models.resource import Resource

from .dto import OwnerOut, ResourceOut


def _branch_value(branch: Any) -> str:
    return branch.value if hasattr(branch, "value") else str(branch)


def row_to_out(row: Any) -> ResourceOut:
    """Convert a discovery projection row to its DTO."""
    average = row.average_rating
    return ResourceOut(
        id=row.id,
        title=row.title,
        description=row.description,
        semester=row.semester,
        branch=_branch_value(row.branch),
        url=row.url,
        file_size=row.file_size,
        owner_id=row.owner_id,
        owner=OwnerOut(
            full_name=row.owner_full_name,
            username=row.owner_username,
            avatar=row.owner_avatar,
        ),
        average_rating=float(average) if average is not None else None,
        total_ratings=int(row.total_ratings or 0),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def resource_to_out(
    resource: Resource, *, average_rating: float | None = None, total_ratings: int = 0
) -> ResourceOut:
    """Convert an ORM resource (owner loaded) to its DTO."""
    owner = resource.owner
    return ResourceOut(
        id=resource.id,
        title=resource.title,
        description=resource.description,
        semester=resource.semester,
        branch=_branch_value(resource.branch),
        url=resource.url,
        file_size=resource.file_size,
        owner_id=resource.owner_id,
        owner=OwnerOut(
            full_name=owner.full_name if owner else None,
            username=owner.username if owner else None,
            avatar=owner.avatar if owner else None,
        ),
        average_rating=average_rating,
        total_ratings=total_ratings,
        created_at=resource.created_at,
        updated_at=resource.updated_at,
    )
