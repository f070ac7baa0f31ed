"""
RatingService
=============

Keeps at most one rating per ``(user, resource)`` pair and reports the
resource's mean rating.

The pair is protected by the ``uq_ratings_user_resource`` unique
constraint and written through :meth:`RatingRepository.upsert`, so two
concurrent ``rate()`` calls for the same pair end with a single row whose
value is the one written last. The mean is recomputed with a grouped
aggregate after each write and is never rounded.
"""

from __future__ import annotations

import logging
from typing import Any

from studyhub.models.rating import MAX_RATING, MIN_RATING
from studyhub.services._shared.base import BaseService
from studyhub.services._shared.errors import NotFoundError, ValidationError

from .dto import RatingStatsOut

logger = logging.getLogger(__name__)

INVALID_RATING = "Rating must be between 1 and 5"


def validate_rating(value: Any) -> int:
    """Return ``value`` when it is an integer within the rating range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(INVALID_RATING)
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(INVALID_RATING)
    return value


class RatingService(BaseService):
    """Rate, un-rate and read the mean rating of resources."""

    def rate(self, resource_id: int, value: Any) -> RatingStatsOut:
        """
        Insert or overwrite the actor's rating of ``resource_id``.

        :returns: Updated statistics of the resource.
        :raises ValidationError: If ``value`` is not an integer in ``[1, 5]``.
        :raises NotFoundError: If the resource is missing or blocked.
        """
        rating = validate_rating(value)
        user_id = self.ensure_actor()
        with self.rw_uow() as uow:
            if uow.resources.get_visible(resource_id) is None:
                raise NotFoundError("Resource", resource_id)
            uow.ratings.upsert(user_id, resource_id, rating)
            average, total = uow.ratings.stats(resource_id)
            logger.info(
                "Resource rated",
                extra={"resource_id": resource_id, "user_id": user_id, "total": total},
            )
            return RatingStatsOut(average_rating=average, total_ratings=total)

    def remove(self, resource_id: int) -> RatingStatsOut:
        """
        Delete the actor's rating of ``resource_id``.

        :returns: Statistics after removal (mean ``0.0`` when none remain).
        :raises NotFoundError: If the resource is missing/blocked or the actor
            never rated it.
        """
        user_id = self.ensure_actor()
        with self.rw_uow() as uow:
            if uow.resources.get_visible(resource_id) is None:
                raise NotFoundError("Resource", resource_id)
            if not uow.ratings.delete_for_pair(user_id, resource_id):
                raise NotFoundError(
                    "Rating", resource_id, "You have not rated this resource yet"
                )
            average, total = uow.ratings.stats(resource_id)
            logger.info("Rating removed", extra={"resource_id": resource_id, "user_id": user_id})
            return RatingStatsOut(average_rating=average, total_ratings=total)

    def mean_rating(self, resource_id: int) -> RatingStatsOut:
        """Read-only statistics; mean ``0.0`` when nobody rated the resource."""
        with self.ro_uow() as uow:
            if uow.resources.get_visible(resource_id) is None:
                raise NotFoundError("Resource", resource_id)
            average, total = uow.ratings.stats(resource_id)
            return RatingStatsOut(average_rating=average, total_ratings=total)
