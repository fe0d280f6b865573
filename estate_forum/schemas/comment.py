"""Comment Pydantic schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from estate_forum.schemas.user import UserResponse


class CommentCreate(BaseModel):
    """Schema for creating a comment."""

    post_id: str
    content: str = Field(..., min_length=1)


class CommentUpdate(BaseModel):
    """Schema for updating a comment."""

    content: str = Field(..., min_length=1)


class CommentResponse(BaseModel):
    """Joined comment view; ``author`` is None when unresolved."""

    id: str
    content: str
    created_at: datetime
    author_id: str
    post_id: str
    author: UserResponse | None = None

    model_config = {"from_attributes": True}
