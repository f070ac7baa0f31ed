"""Resource repository: single-row access and the discovery query."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import Select, func, select, update
from sqlalchemy.orm import joinedload

from studyhub.models.rating import Rating
from studyhub.models.resource import Branch, Resource
from studyhub.models.user import User
from studyhub.repositories.base import BaseRepository, Page, paginate_select


def rating_stats_subquery():
    """Average and count of ratings grouped per resource."""
    return (
        select(
            Rating.resource_id.label("resource_id"),
            func.avg(Rating.rating).label("average_rating"),
            func.count(Rating.id).label("total_ratings"),
        )
        .group_by(Rating.resource_id)
        .subquery("rating_stats")
    )


class ResourceRepository(BaseRepository[Resource]):
    """Persistence-only repository for :class:`Resource`."""

    model = Resource

    def _filterable_fields(self):
        return {
            "owner_id": Resource.owner_id,
            "branch": Resource.branch,
            "semester": Resource.semester,
            "is_blocked": Resource.is_blocked,
        }

    def _updatable_fields(self):
        return {"title", "description"}

    # ---------------------------- Lookups ----------------------------

    def get_visible(self, resource_id: int, *, for_update: bool = False) -> Resource | None:
        """Return the resource unless it is missing or blocked."""
        stmt = (
            select(Resource)
            .options(joinedload(Resource.owner))
            .where(Resource.id == resource_id, Resource.is_blocked.is_(False))
        )
        if for_update:
            stmt = stmt.with_for_update(of=Resource)
        return cast(Resource | None, self.session.execute(stmt).scalars().first())

    def set_blocked(self, resource_id: int, blocked: bool) -> bool:
        """Flip the moderation flag. :returns: ``True`` if the row exists."""
        stmt = (
            update(Resource)
            .where(Resource.id == resource_id)
            .values(is_blocked=blocked)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1

    # ---------------------------- Discovery ----------------------------

    def _discovery_select(self) -> Select[Any]:
        """Resource columns, flattened owner columns and rating stats.

        Owner columns come from a LEFT JOIN, so resources whose owner row is
        gone still appear with ``NULL`` owner fields. Secret user columns
        (password hash, refresh slot) are never selected.
        """
        stats = rating_stats_subquery()
        return (
            select(
                Resource.id,
                Resource.title,
                Resource.description,
                Resource.semester,
                Resource.branch,
                Resource.url,
                Resource.file_size,
                Resource.owner_id,
                Resource.created_at,
                Resource.updated_at,
                User.full_name.label("owner_full_name"),
                User.username.label("owner_username"),
                User.avatar.label("owner_avatar"),
                stats.c.average_rating,
                func.coalesce(stats.c.total_ratings, 0).label("total_ratings"),
            )
            .select_from(Resource)
            .outerjoin(User, User.id == Resource.owner_id)
            .outerjoin(stats, stats.c.resource_id == Resource.id)
            .where(Resource.is_blocked.is_(False))
        )

    def search(
        self,
        *,
        semester: int | None = None,
        branch: Branch | None = None,
        search_text: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page[Any]:
        """Filter, join, project and paginate visible resources.

        ``search_text`` is a case-insensitive substring match on the title;
        ``%`` and ``_`` in it are escaped and match literally.

        :returns: Page of rows, newest first (ties broken by id, newest first).
        """
        stmt = self._discovery_select()
        if semester is not None:
            stmt = stmt.where(Resource.semester == semester)
        if branch is not None:
            stmt = stmt.where(Resource.branch == branch)
        if search_text:
            stmt = stmt.where(Resource.title.icontains(search_text, autoescape=True))
        stmt = stmt.order_by(Resource.created_at.desc(), Resource.id.desc())

        rows, total = paginate_select(
            self.session, stmt, page=page, limit=limit, with_total=True, scalars=False
        )
        return Page(items=rows, total=total, page=page, limit=limit)

    def get_projection(self, resource_id: int) -> Any | None:
        """Single visible resource in the same projection as :meth:`search`."""
        stmt = self._discovery_select().where(Resource.id == resource_id)
        return self.session.execute(stmt).first()

    def count_by_owner(self, owner_id: int) -> int:
        return self.count(owner_id=owner_id, is_blocked=False)
