"""Rating repository: atomic upsert and per-resource statistics."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

from studyhub.models.rating import Rating
from studyhub.repositories.base import BaseRepository

_UPSERT_DIALECTS = {"sqlite": sqlite_insert, "postgresql": pg_insert}


class RatingRepository(BaseRepository[Rating]):
    """Persistence-only repository for :class:`Rating`."""

    model = Rating

    def _filterable_fields(self):
        return {"user_id": Rating.user_id, "resource_id": Rating.resource_id}

    def get_for_pair(self, user_id: int, resource_id: int) -> Rating | None:
        stmt = select(Rating).where(Rating.user_id == user_id, Rating.resource_id == resource_id)
        return cast(Rating | None, self.session.execute(stmt).scalars().first())

    def upsert(self, user_id: int, resource_id: int, value: int) -> None:
        """Insert the pair's rating or overwrite the existing value.

        On SQLite and PostgreSQL this is one ``INSERT .. ON CONFLICT DO
        UPDATE`` keyed on ``uq_ratings_user_resource``. Other dialects insert
        inside a SAVEPOINT and fall back to updating the row that won.
        """
        values = {"user_id": user_id, "resource_id": resource_id, "rating": value}
        dialect = self.session.get_bind().dialect.name
        insert_fn = _UPSERT_DIALECTS.get(dialect)
        if insert_fn is not None:
            stmt = insert_fn(Rating).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "resource_id"],
                set_={"rating": stmt.excluded.rating},
            )
            self.session.execute(stmt)
            return

        existing = self.get_for_pair(user_id, resource_id)
        if existing is None:
            try:
                with self.session.begin_nested():
                    self.session.add(Rating(**values))
                return
            except IntegrityError:
                existing = self.get_for_pair(user_id, resource_id)
                if existing is None:
                    raise
        existing.rating = value
        self.flush()

    def delete_for_pair(self, user_id: int, resource_id: int) -> bool:
        """Delete the pair's rating. :returns: ``True`` if a row was removed."""
        stmt = (
            delete(Rating)
            .where(Rating.user_id == user_id, Rating.resource_id == resource_id)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount > 0

    def stats(self, resource_id: int) -> tuple[float, int]:
        """Return ``(mean, count)``; the mean is ``0.0`` when there are no ratings.

        The mean is the unrounded arithmetic average of stored values.
        """
        stmt = select(func.avg(Rating.rating), func.count(Rating.id)).where(
            Rating.resource_id == resource_id
        )
        avg, count = self.session.execute(stmt).one()
        return (float(avg) if avg is not None else 0.0), int(count)
