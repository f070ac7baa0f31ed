from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RatingStatsOut:
    """
    Rating statistics of one resource.

    :param average_rating: Unrounded arithmetic mean, ``0.0`` with no ratings.
    :param total_ratings: Number of stored ratings.
    """

    average_rating: float
    total_ratings: int
