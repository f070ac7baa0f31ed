from .service import CommentService

__all__ = ["CommentService"]
