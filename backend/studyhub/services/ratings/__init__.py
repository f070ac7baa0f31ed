from .service import RatingService

__all__ = ["RatingService"]
