"""Post Pydantic schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from estate_forum.schemas.estate import EstateResponse
from estate_forum.schemas.user import UserResponse


class PostCreate(BaseModel):
    """Schema for creating a post."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    estate_id: str | None = None


class PostUpdate(BaseModel):
    """Schema for updating a post."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class PostResponse(BaseModel):
    """Joined post view; ``author`` and ``estate`` are None when unresolved."""

    id: str
    title: str
    content: str
    created_at: datetime
    author_id: str
    estate_id: str | None = None
    author: UserResponse | None = None
    estate: EstateResponse | None = None

    model_config = {"from_attributes": True}
