"""Comment creation, updates and removal."""

import logging

from sqlalchemy.orm import Session

from estate_forum.core.ids import require_id
from estate_forum.core.result import Failure, Result, forbidden, not_found, store_guard
from estate_forum.models.comment import Comment
from estate_forum.models.post import Post
from estate_forum.models.user import User
from estate_forum.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from estate_forum.services import graph, queries
from estate_forum.services.estates import can_manage

logger = logging.getLogger(__name__)


@store_guard("Failed to create comment")
def create_comment(db: Session, author_id: str, comment_data: CommentCreate) -> Result[CommentResponse]:
    """Insert a comment, then link it to its post and its author."""
    for value, name in ((author_id, "user id"), (comment_data.post_id, "post id")):
        failure = require_id(value, name)
        if failure:
            return failure
    if db.get(User, author_id) is None:
        return not_found(f"User {author_id} not found")
    if db.get(Post, comment_data.post_id) is None:
        return not_found(f"Post {comment_data.post_id} not found")

    comment = Comment(
        content=comment_data.content,
        author_id=author_id,
        post_id=comment_data.post_id,
    )
    db.add(comment)
    db.commit()

    linked = graph.add_comment_to_post(db, comment.post_id, comment.id)
    if isinstance(linked, Failure):
        return linked
    linked = graph.add_comment_to_user(db, author_id, comment.id)
    if isinstance(linked, Failure):
        return linked

    logger.info("User %s commented %s on post %s", author_id, comment.id, comment.post_id)
    return queries.get_comment(db, comment.id)


@store_guard("Failed to update comment")
def update_comment(
    db: Session,
    comment_id: str,
    actor: User,
    comment_data: CommentUpdate,
) -> Result[CommentResponse]:
    failure = require_id(comment_id, "comment id")
    if failure:
        return failure
    comment = db.get(Comment, comment_id)
    if comment is None:
        return not_found(f"Comment {comment_id} not found")
    if not can_manage(actor, comment.author_id):
        return forbidden("Only the author can update this comment")

    comment.content = comment_data.content
    db.commit()
    return queries.get_comment(db, comment_id)


@store_guard("Failed to remove comment")
def remove_comment(db: Session, comment_id: str, actor: User) -> Result[bool]:
    failure = require_id(comment_id, "comment id")
    if failure:
        return failure
    comment = db.get(Comment, comment_id)
    if comment is None:
        return not_found(f"Comment {comment_id} not found")
    if not can_manage(actor, comment.author_id):
        return forbidden("Only the author can remove this comment")
    return graph.delete_comment(db, comment_id)
