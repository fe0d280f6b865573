"""Estate routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from estate_forum.api.dependencies import get_current_user, unwrap
from estate_forum.core.config import settings
from estate_forum.core.database import get_db
from estate_forum.models.user import User
from estate_forum.schemas.estate import EstateCreate, EstateResponse, EstateUpdate
from estate_forum.schemas.pagination import PaginatedResponse
from estate_forum.services import estates, queries

router = APIRouter(prefix="/estates", tags=["estates"])


@router.post("", response_model=EstateResponse, status_code=status.HTTP_201_CREATED)
def create_estate(
    estate_data: EstateCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> EstateResponse:
    """Create an estate owned by the current user."""
    return unwrap(estates.create_estate(db, current_user.id, estate_data))


@router.get("", response_model=list[EstateResponse])
def list_estates(db: Session = Depends(get_db)) -> list[EstateResponse]:
    return unwrap(queries.list_all_estates(db))


@router.get("/search", response_model=PaginatedResponse[EstateResponse])
def search_estates(
    title: str | None = None,
    price_min: float | None = Query(None, alias="priceMin"),
    price_max: float | None = Query(None, alias="priceMax"),
    categories: list[str] | None = Query(None),
    skip: int = 0,
    limit: int = settings.DEFAULT_PAGE_SIZE,
    db: Session = Depends(get_db),
) -> PaginatedResponse[EstateResponse]:
    """Search estates by title, inclusive price range and categories."""
    return unwrap(
        queries.search_estates(db, title, price_min, price_max, categories, skip, limit)
    )


@router.get("/user/{user_id}", response_model=PaginatedResponse[EstateResponse])
def list_user_estates(
    user_id: str,
    page: int = 1,
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    db: Session = Depends(get_db),
) -> PaginatedResponse[EstateResponse]:
    """List estates created by a user."""
    return unwrap(queries.list_estates_for_user(db, user_id, page, page_size))


@router.get("/favorites/{user_id}", response_model=PaginatedResponse[EstateResponse])
def list_favorite_estates(
    user_id: str,
    page: int = 1,
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    db: Session = Depends(get_db),
) -> PaginatedResponse[EstateResponse]:
    """List a user's favorite estates."""
    return unwrap(queries.list_favorite_estates_for_user(db, user_id, page, page_size))


@router.get("/{estate_id}", response_model=EstateResponse)
def get_estate(estate_id: str, db: Session = Depends(get_db)) -> EstateResponse:
    return unwrap(queries.get_estate(db, estate_id))


@router.put("/{estate_id}", response_model=EstateResponse)
def update_estate(
    estate_id: str,
    estate_data: EstateUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> EstateResponse:
    return unwrap(estates.update_estate(db, estate_id, current_user, estate_data))


@router.delete("/{estate_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_estate(
    estate_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    """Delete an estate together with its posts and comments."""
    unwrap(estates.remove_estate(db, estate_id, current_user))
