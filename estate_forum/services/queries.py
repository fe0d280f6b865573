"""Read-side queries: filtered, paginated, joined views over the collections.

Authors, owners and estates are attached at query time with left outer joins.
A reference whose target no longer exists comes back as ``None`` on the view
instead of failing the page.
"""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from estate_forum.core.config import settings
from estate_forum.core.ids import require_id
from estate_forum.core.result import Failure, Ok, Result, not_found, store_guard, validation
from estate_forum.models.comment import Comment
from estate_forum.models.enums import EstateCategory
from estate_forum.models.estate import Estate
from estate_forum.models.post import Post
from estate_forum.models.user import User
from estate_forum.schemas.comment import CommentResponse
from estate_forum.schemas.estate import EstateResponse
from estate_forum.schemas.pagination import PaginatedResponse
from estate_forum.schemas.post import PostResponse
from estate_forum.schemas.user import UserResponse


def page_window(page: int, page_size: int) -> Result[tuple[int, int]]:
    """Convert a 1-based page number and page size into (skip, limit).

    Page sizes above ``MAX_PAGE_SIZE`` are clamped to it.
    """
    if page < 1:
        return validation("page must be 1 or greater")
    if page_size <= 0:
        return validation("page_size must be greater than 0")
    page_size = min(page_size, settings.MAX_PAGE_SIZE)
    return Ok(((page - 1) * page_size, page_size))


def skip_window(skip: int, limit: int) -> Result[tuple[int, int]]:
    """Validate an explicit (skip, limit) pair, clamping ``limit`` to ``MAX_PAGE_SIZE``."""
    if skip < 0:
        return validation("skip must not be negative")
    if limit <= 0:
        return validation("limit must be greater than 0")
    return Ok((skip, min(limit, settings.MAX_PAGE_SIZE)))


def parse_categories(categories: Iterable[str | EstateCategory] | None) -> Result[list[EstateCategory]]:
    """Parse category names case-insensitively; an unknown name is a validation failure."""
    parsed: list[EstateCategory] = []
    for raw in categories or []:
        category = raw if isinstance(raw, EstateCategory) else EstateCategory.parse(raw)
        if category is None:
            return validation(f"Unknown estate category: {raw!r}")
        if category not in parsed:
            parsed.append(category)
    return Ok(parsed)


# ---------------------------------------------------------------------------
# View builders
# ---------------------------------------------------------------------------


def user_view(user: User | None) -> UserResponse | None:
    return UserResponse.model_validate(user) if user is not None else None


def estate_view(estate: Estate, owner: User | None = None) -> EstateResponse:
    view = EstateResponse.model_validate(estate)
    view.user = user_view(owner)
    return view


def post_view(post: Post, author: User | None, estate: Estate | None) -> PostResponse:
    view = PostResponse.model_validate(post)
    view.author = user_view(author)
    view.estate = estate_view(estate) if estate is not None else None
    return view


def comment_view(comment: Comment, author: User | None) -> CommentResponse:
    view = CommentResponse.model_validate(comment)
    view.author = user_view(author)
    return view


def _joined_posts():
    return (
        select(Post, User, Estate)
        .outerjoin(User, User.id == Post.author_id)
        .outerjoin(Estate, Estate.id == Post.estate_id)
    )


def _joined_estates():
    return select(Estate, User).outerjoin(User, User.id == Estate.user_id)


def _count(db: Session, model: type, criteria: list[Any]) -> int:
    return db.scalar(select(func.count()).select_from(model).where(*criteria)) or 0


def _post_page(db: Session, criteria: list[Any], skip: int, limit: int) -> PaginatedResponse[PostResponse]:
    stmt = (
        _joined_posts()
        .where(*criteria)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(skip)
        .limit(limit)
    )
    rows = db.execute(stmt).all()
    return PaginatedResponse[PostResponse](
        data=[post_view(post, author, estate) for post, author, estate in rows],
        total_length=_count(db, Post, criteria),
    )


def _estate_page(db: Session, criteria: list[Any], skip: int, limit: int) -> PaginatedResponse[EstateResponse]:
    stmt = _joined_estates().where(*criteria).order_by(Estate.id.desc()).offset(skip).limit(limit)
    rows = db.execute(stmt).all()
    return PaginatedResponse[EstateResponse](
        data=[estate_view(estate, owner) for estate, owner in rows],
        total_length=_count(db, Estate, criteria),
    )


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------


@store_guard("Failed to load posts")
def list_posts(
    db: Session,
    title: str | None = None,
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
) -> Result[PaginatedResponse[PostResponse]]:
    """Newest posts first, optionally filtered by a case-insensitive title substring."""
    window = page_window(page, page_size)
    if isinstance(window, Failure):
        return window

    criteria = []
    if title:
        criteria.append(Post.title.icontains(title, autoescape=True))
    return Ok(_post_page(db, criteria, *window.value))


@store_guard("Failed to load posts")
def list_posts_for_estate(
    db: Session,
    estate_id: str,
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
) -> Result[PaginatedResponse[PostResponse]]:
    failure = require_id(estate_id, "estate id")
    if failure:
        return failure
    window = page_window(page, page_size)
    if isinstance(window, Failure):
        return window
    return Ok(_post_page(db, [Post.estate_id == estate_id], *window.value))


@store_guard("Failed to load posts")
def list_posts_for_user(
    db: Session,
    user_id: str,
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
) -> Result[PaginatedResponse[PostResponse]]:
    failure = require_id(user_id, "user id")
    if failure:
        return failure
    window = page_window(page, page_size)
    if isinstance(window, Failure):
        return window
    return Ok(_post_page(db, [Post.author_id == user_id], *window.value))


@store_guard("Failed to load post")
def get_post(db: Session, post_id: str) -> Result[PostResponse]:
    failure = require_id(post_id, "post id")
    if failure:
        return failure
    row = db.execute(_joined_posts().where(Post.id == post_id)).first()
    if row is None:
        return not_found(f"Post {post_id} not found")
    post, author, estate = row
    return Ok(post_view(post, author, estate))


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


@store_guard("Failed to load comments")
def list_comments_for_post(
    db: Session,
    post_id: str,
    skip: int = 0,
    limit: int = settings.DEFAULT_PAGE_SIZE,
) -> Result[PaginatedResponse[CommentResponse]]:
    """Newest comments on a post first, with their authors joined."""
    failure = require_id(post_id, "post id")
    if failure:
        return failure
    window = skip_window(skip, limit)
    if isinstance(window, Failure):
        return window

    criteria = [Comment.post_id == post_id]
    stmt = (
        select(Comment, User)
        .outerjoin(User, User.id == Comment.author_id)
        .where(*criteria)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .offset(window.value[0])
        .limit(window.value[1])
    )
    rows = db.execute(stmt).all()
    return Ok(
        PaginatedResponse[CommentResponse](
            data=[comment_view(comment, author) for comment, author in rows],
            total_length=_count(db, Comment, criteria),
        )
    )


@store_guard("Failed to load comment")
def get_comment(db: Session, comment_id: str) -> Result[CommentResponse]:
    failure = require_id(comment_id, "comment id")
    if failure:
        return failure
    stmt = select(Comment, User).outerjoin(User, User.id == Comment.author_id).where(Comment.id == comment_id)
    row = db.execute(stmt).first()
    if row is None:
        return not_found(f"Comment {comment_id} not found")
    return Ok(comment_view(*row))


# ---------------------------------------------------------------------------
# Estates
# ---------------------------------------------------------------------------


@store_guard("Failed to search estates")
def search_estates(
    db: Session,
    title: str | None = None,
    price_min: float | None = None,
    price_max: float | None = None,
    categories: Iterable[str | EstateCategory] | None = None,
    skip: int = 0,
    limit: int = settings.DEFAULT_PAGE_SIZE,
) -> Result[PaginatedResponse[EstateResponse]]:
    """Search estates; every given filter must match.

    ``price_min`` and ``price_max`` are inclusive. An empty or missing
    ``categories`` means any category.
    """
    window = skip_window(skip, limit)
    if isinstance(window, Failure):
        return window
    parsed = parse_categories(categories)
    if isinstance(parsed, Failure):
        return parsed

    criteria = []
    if title and title.strip():
        criteria.append(Estate.title.icontains(title.strip(), autoescape=True))
    if price_min is not None:
        criteria.append(Estate.price >= price_min)
    if price_max is not None:
        criteria.append(Estate.price <= price_max)
    if parsed.value:
        criteria.append(Estate.category.in_(parsed.value))
    return Ok(_estate_page(db, criteria, *window.value))


@store_guard("Failed to load estates")
def list_estates_for_user(
    db: Session,
    user_id: str,
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
) -> Result[PaginatedResponse[EstateResponse]]:
    """Estates owned by a user."""
    failure = require_id(user_id, "user id")
    if failure:
        return failure
    window = page_window(page, page_size)
    if isinstance(window, Failure):
        return window
    return Ok(_estate_page(db, [Estate.user_id == user_id], *window.value))


@store_guard("Failed to load favorite estates")
def list_favorite_estates_for_user(
    db: Session,
    user_id: str,
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
) -> Result[PaginatedResponse[EstateResponse]]:
    """Estates in a user's favorites.

    Ids that no longer resolve to an estate are neither returned nor counted.
    """
    failure = require_id(user_id, "user id")
    if failure:
        return failure
    window = page_window(page, page_size)
    if isinstance(window, Failure):
        return window

    user = db.get(User, user_id)
    if user is None:
        return not_found(f"User {user_id} not found")
    return Ok(_estate_page(db, [Estate.id.in_(user.favorite_estate_ids or [])], *window.value))


@store_guard("Failed to load estate")
def get_estate(db: Session, estate_id: str) -> Result[EstateResponse]:
    """A single estate with its owner joined."""
    failure = require_id(estate_id, "estate id")
    if failure:
        return failure
    row = db.execute(_joined_estates().where(Estate.id == estate_id)).first()
    if row is None:
        return not_found(f"Estate {estate_id} not found")
    return Ok(estate_view(*row))


@store_guard("Failed to load estates")
def list_all_estates(db: Session) -> Result[list[EstateResponse]]:
    rows = db.execute(_joined_estates().order_by(Estate.id.desc())).all()
    return Ok([estate_view(estate, owner) for estate, owner in rows])
