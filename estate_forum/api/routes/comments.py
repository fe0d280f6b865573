"""Comment routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from estate_forum.api.dependencies import get_current_user, unwrap
from estate_forum.core.config import settings
from estate_forum.core.database import get_db
from estate_forum.models.user import User
from estate_forum.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from estate_forum.schemas.pagination import PaginatedResponse
from estate_forum.services import comments, queries

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    comment_data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CommentResponse:
    return unwrap(comments.create_comment(db, current_user.id, comment_data))


@router.get("/post/{post_id}", response_model=PaginatedResponse[CommentResponse])
def list_post_comments(
    post_id: str,
    skip: int = 0,
    limit: int = settings.DEFAULT_PAGE_SIZE,
    db: Session = Depends(get_db),
) -> PaginatedResponse[CommentResponse]:
    """List comments on a post, newest first."""
    return unwrap(queries.list_comments_for_post(db, post_id, skip, limit))


@router.put("/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: str,
    comment_data: CommentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CommentResponse:
    return unwrap(comments.update_comment(db, comment_id, current_user, comment_data))


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_comment(
    comment_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    unwrap(comments.remove_comment(db, comment_id, current_user))
