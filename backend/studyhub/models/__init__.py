from studyhub.models.comment import Comment
from studyhub.models.rating import Rating
from studyhub.models.resource import Branch, Resource
from studyhub.models.user import Role, User

__all__ = [
    "Branch",
    "Comment",
    "Rating",
    "Resource",
    "Role",
    "User",
]
