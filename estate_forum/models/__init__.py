"""Collection models."""

from estate_forum.models.comment import Comment
from estate_forum.models.enums import EstateCategory, UserRole
from estate_forum.models.estate import Estate
from estate_forum.models.post import Post
from estate_forum.models.user import User

__all__ = ["Comment", "Estate", "EstateCategory", "Post", "User", "UserRole"]
