"""Estate Pydantic schemas for request/response validation."""

from pydantic import BaseModel, Field

from estate_forum.models.enums import EstateCategory
from estate_forum.schemas.user import UserResponse


class EstateBase(BaseModel):
    """Fields the owner controls."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str
    price: float
    square_meters: int
    total_rooms: int
    category: EstateCategory
    floor_number: int | None = None
    images: list[str] = []
    longitude: float = 0.0
    latitude: float = 0.0


class EstateCreate(EstateBase):
    """Schema for creating an estate. Images are already-stored paths."""


class EstateUpdate(BaseModel):
    """Schema for updating an estate."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: float | None = None
    square_meters: int | None = None
    total_rooms: int | None = None
    category: EstateCategory | None = None
    floor_number: int | None = None
    images: list[str] | None = None
    longitude: float | None = None
    latitude: float | None = None


class EstateResponse(EstateBase):
    """Estate view.

    ``user`` is only present when the owner was joined and still exists;
    ``user_id`` is always set.
    """

    id: str
    user_id: str
    user: UserResponse | None = None

    model_config = {"from_attributes": True}
