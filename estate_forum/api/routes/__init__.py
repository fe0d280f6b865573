"""API routers."""

from estate_forum.api.routes import comments, estates, health, posts, users

__all__ = ["comments", "estates", "health", "posts", "users"]
