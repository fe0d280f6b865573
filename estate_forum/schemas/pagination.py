"""Paginated response envelope."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results plus the number of matches before pagination.

    Serialized as ``{"data": [...], "totalLength": n}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: list[T]
    total_length: int = Field(alias="totalLength")
