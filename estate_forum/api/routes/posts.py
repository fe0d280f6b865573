"""Forum post routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from estate_forum.api.dependencies import get_current_user, unwrap
from estate_forum.core.config import settings
from estate_forum.core.database import get_db
from estate_forum.models.user import User
from estate_forum.schemas.pagination import PaginatedResponse
from estate_forum.schemas.post import PostCreate, PostResponse, PostUpdate
from estate_forum.services import posts, queries

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PostResponse:
    return unwrap(posts.create_post(db, current_user.id, post_data))


@router.get("", response_model=PaginatedResponse[PostResponse])
def list_posts(
    title: str = "",
    page: int = 1,
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    db: Session = Depends(get_db),
) -> PaginatedResponse[PostResponse]:
    """List posts, newest first, optionally filtered by title."""
    return unwrap(queries.list_posts(db, title, page, page_size))


@router.get("/estate/{estate_id}", response_model=PaginatedResponse[PostResponse])
def list_estate_posts(
    estate_id: str,
    page: int = 1,
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    db: Session = Depends(get_db),
) -> PaginatedResponse[PostResponse]:
    return unwrap(queries.list_posts_for_estate(db, estate_id, page, page_size))


@router.get("/user/{user_id}", response_model=PaginatedResponse[PostResponse])
def list_user_posts(
    user_id: str,
    page: int = 1,
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    db: Session = Depends(get_db),
) -> PaginatedResponse[PostResponse]:
    return unwrap(queries.list_posts_for_user(db, user_id, page, page_size))


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, db: Session = Depends(get_db)) -> PostResponse:
    return unwrap(queries.get_post(db, post_id))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    post_data: PostUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PostResponse:
    return unwrap(posts.update_post(db, post_id, current_user, post_data))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    """Delete a post together with its comments."""
    unwrap(posts.remove_post(db, post_id, current_user))
