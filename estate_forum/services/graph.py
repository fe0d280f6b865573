"""Reference graph manager.

The only module that writes id-list fields. Every edge between two
collections is stored twice (an id list on one side, an id or id list on the
other); the functions here keep both sides in step.

There is no multi-document transaction: every single-document write is
committed on its own, and a cascade is an ordered sequence of such writes.
Children are removed before their parent is detached and deleted, and a
document's inbound references are pruned before the document itself goes, so
an interrupted cascade leaves unreferenced documents behind rather than ids
pointing at documents that no longer exist. Nothing is rolled back; the first
failure stops the cascade and is returned unchanged.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from estate_forum.core.database import Base
from estate_forum.core.ids import require_id
from estate_forum.core.result import Failure, Ok, Result, not_found, store_guard, validation
from estate_forum.models.comment import Comment
from estate_forum.models.estate import Estate
from estate_forum.models.post import Post
from estate_forum.models.user import User
from estate_forum.services.favorites import can_favorite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    """An id-list field on one collection pointing at documents of another."""

    owner: type[Base]
    field: str

    @property
    def label(self) -> str:
        return f"{self.owner.__name__}.{self.field}"


USER_ESTATES = Edge(User, "estate_ids")
USER_POSTS = Edge(User, "post_ids")
USER_COMMENTS = Edge(User, "comment_ids")
USER_FAVORITES = Edge(User, "favorite_estate_ids")
ESTATE_POSTS = Edge(Estate, "post_ids")
ESTATE_FAVORITED_BY = Edge(Estate, "favorited_by_users_ids")
POST_COMMENTS = Edge(Post, "comment_ids")


EDGE_WRITE_ATTEMPTS = 3


def _write_ids(
    db: Session,
    model: type[Base],
    doc_id: str,
    field: str,
    change: Callable[[list[str]], list[str]],
) -> bool | None:
    """Apply ``change`` to one id list of a freshly loaded document and commit.

    Returns None when the document does not exist, otherwise whether the list
    changed. The update is conditional on the document's version; if another
    writer committed in between, the stale write is rolled back and ``change``
    is re-applied to the current list.
    """
    for attempt in range(1, EDGE_WRITE_ATTEMPTS + 1):
        doc = db.get(model, doc_id, populate_existing=True)
        if doc is None:
            return None
        ids = list(getattr(doc, field) or [])
        updated = change(ids)
        if updated == ids:
            return False
        setattr(doc, field, updated)
        try:
            db.commit()
            return True
        except StaleDataError:
            db.rollback()
            if attempt == EDGE_WRITE_ATTEMPTS:
                raise
            logger.warning("%s %s changed concurrently, retrying %s", model.__name__, doc_id, field)
    return False


def _append(db: Session, model: type[Base], doc_id: str, field: str, member_id: str) -> bool | None:
    return _write_ids(db, model, doc_id, field, lambda ids: ids if member_id in ids else [*ids, member_id])


def _discard(db: Session, model: type[Base], doc_id: str, field: str, member_id: str) -> bool | None:
    return _write_ids(db, model, doc_id, field, lambda ids: [i for i in ids if i != member_id])


def _push(db: Session, edge: Edge, owner_id: str, member_id: str) -> Result[bool]:
    """Add ``member_id`` to the owner's list; Ok(False) if it was already there."""
    changed = _append(db, edge.owner, owner_id, edge.field, member_id)
    if changed is None:
        return not_found(f"{edge.owner.__name__} {owner_id} not found")
    return Ok(changed)


def _pull(
    db: Session,
    edge: Edge,
    owner_id: str,
    member_id: str,
    missing_ok: bool = False,
) -> Result[bool]:
    """Remove ``member_id`` from the owner's list; Ok(False) if it was not there.

    With ``missing_ok`` an absent owner counts as nothing to prune.
    """
    changed = _discard(db, edge.owner, owner_id, edge.field, member_id)
    if changed is None:
        if missing_ok:
            logger.debug("%s: owner %s already gone, nothing to prune", edge.label, owner_id)
            return Ok(False)
        return not_found(f"{edge.owner.__name__} {owner_id} not found")
    return Ok(changed)


# ---------------------------------------------------------------------------
# Single-edge mutators
# ---------------------------------------------------------------------------


@store_guard("Failed to link estate to user")
def link_estate_to_user(db: Session, estate_id: str, user_id: str) -> Result[bool]:
    """Record a newly created estate in its owner's ``estate_ids``."""
    estate = db.get(Estate, estate_id)
    if estate is None:
        return not_found(f"Estate {estate_id} not found")
    if estate.user_id != user_id:
        return validation(f"Estate {estate_id} is not owned by user {user_id}")
    return _push(db, USER_ESTATES, user_id, estate_id)


@store_guard("Failed to add post to user")
def add_post_to_user(db: Session, user_id: str, post_id: str) -> Result[bool]:
    post = db.get(Post, post_id)
    if post is None:
        return not_found(f"Post {post_id} not found")
    if post.author_id != user_id:
        return validation(f"Post {post_id} is not authored by user {user_id}")
    return _push(db, USER_POSTS, user_id, post_id)


@store_guard("Failed to remove post from user")
def remove_post_from_user(db: Session, user_id: str, post_id: str) -> Result[bool]:
    return _pull(db, USER_POSTS, user_id, post_id)


@store_guard("Failed to add post to estate")
def add_post_to_estate(db: Session, estate_id: str, post_id: str) -> Result[bool]:
    """Attach a post to an estate, setting ``post.estate_id`` if it was unset."""
    post = db.get(Post, post_id)
    if post is None:
        return not_found(f"Post {post_id} not found")
    if post.estate_id not in (None, estate_id):
        return validation(f"Post {post_id} already belongs to estate {post.estate_id}")
    result = _push(db, ESTATE_POSTS, estate_id, post_id)
    if isinstance(result, Failure):
        return result
    if post.estate_id is None:
        post.estate_id = estate_id
        db.commit()
    return result


@store_guard("Failed to remove post from estate")
def remove_post_from_estate(db: Session, estate_id: str, post_id: str) -> Result[bool]:
    """Detach a post from an estate; the post itself is kept."""
    result = _pull(db, ESTATE_POSTS, estate_id, post_id)
    if isinstance(result, Failure):
        return result
    post = db.get(Post, post_id)
    if post is not None and post.estate_id == estate_id:
        post.estate_id = None
        db.commit()
    return result


@store_guard("Failed to add comment to post")
def add_comment_to_post(db: Session, post_id: str, comment_id: str) -> Result[bool]:
    comment = db.get(Comment, comment_id)
    if comment is None:
        return not_found(f"Comment {comment_id} not found")
    if comment.post_id != post_id:
        return validation(f"Comment {comment_id} does not belong to post {post_id}")
    return _push(db, POST_COMMENTS, post_id, comment_id)


@store_guard("Failed to remove comment from post")
def remove_comment_from_post(db: Session, post_id: str, comment_id: str) -> Result[bool]:
    return _pull(db, POST_COMMENTS, post_id, comment_id)


@store_guard("Failed to add comment to user")
def add_comment_to_user(db: Session, user_id: str, comment_id: str) -> Result[bool]:
    comment = db.get(Comment, comment_id)
    if comment is None:
        return not_found(f"Comment {comment_id} not found")
    if comment.author_id != user_id:
        return validation(f"Comment {comment_id} is not authored by user {user_id}")
    return _push(db, USER_COMMENTS, user_id, comment_id)


@store_guard("Failed to remove comment from user")
def remove_comment_from_user(db: Session, user_id: str, comment_id: str) -> Result[bool]:
    return _pull(db, USER_COMMENTS, user_id, comment_id)


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------


@store_guard("Failed to add estate to favorites")
def add_favorite(db: Session, user_id: str, estate_id: str) -> Result[bool]:
    """Mark an estate as a user's favorite, on both the user and the estate.

    Rejected with Forbidden for the estate's owner and with Conflict when the
    estate is already a favorite.
    """
    for value, name in ((user_id, "user id"), (estate_id, "estate id")):
        failure = require_id(value, name)
        if failure:
            return failure

    user = db.get(User, user_id)
    if user is None:
        return not_found(f"User {user_id} not found")
    estate = db.get(Estate, estate_id)
    if estate is None:
        return not_found(f"Estate {estate_id} not found")

    decision = can_favorite(user_id, estate, user.favorite_estate_ids or [])
    if isinstance(decision, Failure):
        return decision

    for edge, owner_id, member_id in (
        (USER_FAVORITES, user_id, estate_id),
        (ESTATE_FAVORITED_BY, estate_id, user_id),
    ):
        result = _push(db, edge, owner_id, member_id)
        if isinstance(result, Failure):
            return result

    logger.info("User %s favorited estate %s", user_id, estate_id)
    return Ok(True)


@store_guard("Failed to remove estate from favorites")
def remove_favorite(db: Session, user_id: str, estate_id: str) -> Result[bool]:
    """Unmark a favorite on both sides.

    Removing a favorite that is not there changes nothing and returns Ok(False).
    """
    for value, name in ((user_id, "user id"), (estate_id, "estate id")):
        failure = require_id(value, name)
        if failure:
            return failure

    user = db.get(User, user_id)
    if user is None:
        return not_found(f"User {user_id} not found")

    user_side = _pull(db, USER_FAVORITES, user_id, estate_id)
    if isinstance(user_side, Failure):
        return user_side
    estate_side = _pull(db, ESTATE_FAVORITED_BY, estate_id, user_id, missing_ok=True)
    if isinstance(estate_side, Failure):
        return estate_side

    changed = user_side.value or estate_side.value
    if changed:
        logger.info("User %s unfavorited estate %s", user_id, estate_id)
    return Ok(changed)


# ---------------------------------------------------------------------------
# Cascading deletes
# ---------------------------------------------------------------------------


@store_guard("Failed to delete comment")
def delete_comment(db: Session, comment_id: str) -> Result[bool]:
    """Detach a comment from its post and author, then delete it."""
    failure = require_id(comment_id, "comment id")
    if failure:
        return failure

    comment = db.get(Comment, comment_id)
    if comment is None:
        return not_found(f"Comment {comment_id} not found")

    for edge, owner_id in ((POST_COMMENTS, comment.post_id), (USER_COMMENTS, comment.author_id)):
        result = _pull(db, edge, owner_id, comment_id, missing_ok=True)
        if isinstance(result, Failure):
            return result

    db.delete(comment)
    db.commit()
    logger.info("Deleted comment %s", comment_id)
    return Ok(True)


@store_guard("Failed to delete post")
def delete_post(db: Session, post_id: str) -> Result[bool]:
    """Delete a post's comments, detach it from its estate and author, then delete it."""
    failure = require_id(post_id, "post id")
    if failure:
        return failure

    post = db.get(Post, post_id)
    if post is None:
        return not_found(f"Post {post_id} not found")

    comment_ids = db.scalars(select(Comment.id).where(Comment.post_id == post_id)).all()
    for comment_id in comment_ids:
        result = delete_comment(db, comment_id)
        if isinstance(result, Failure):
            logger.warning("Cascade for post %s stopped at comment %s: %s", post_id, comment_id, result.message)
            return result

    if post.estate_id is not None:
        result = _pull(db, ESTATE_POSTS, post.estate_id, post_id, missing_ok=True)
        if isinstance(result, Failure):
            return result

    result = _pull(db, USER_POSTS, post.author_id, post_id, missing_ok=True)
    if isinstance(result, Failure):
        return result

    db.delete(post)
    db.commit()
    logger.info("Deleted post %s with %d comment(s)", post_id, len(comment_ids))
    return Ok(True)


@store_guard("Failed to delete estate")
def delete_estate(db: Session, estate_id: str) -> Result[bool]:
    """Delete an estate with every post about it, then unlink it from all users."""
    failure = require_id(estate_id, "estate id")
    if failure:
        return failure

    estate = db.get(Estate, estate_id)
    if estate is None:
        return not_found(f"Estate {estate_id} not found")

    post_ids = db.scalars(select(Post.id).where(Post.estate_id == estate_id)).all()
    for post_id in post_ids:
        result = delete_post(db, post_id)
        if isinstance(result, Failure):
            logger.warning("Cascade for estate %s stopped at post %s: %s", estate_id, post_id, result.message)
            return result

    result = _pull(db, USER_ESTATES, estate.user_id, estate_id, missing_ok=True)
    if isinstance(result, Failure):
        return result

    for user_id in list(estate.favorited_by_users_ids or []):
        result = _pull(db, USER_FAVORITES, user_id, estate_id, missing_ok=True)
        if isinstance(result, Failure):
            return result

    db.delete(estate)
    db.commit()
    logger.info("Deleted estate %s with %d post(s)", estate_id, len(post_ids))
    return Ok(True)
