"""Forum post creation, updates and removal."""

import logging

from sqlalchemy.orm import Session

from estate_forum.core.ids import require_id
from estate_forum.core.result import Failure, Result, forbidden, not_found, store_guard
from estate_forum.models.estate import Estate
from estate_forum.models.post import Post
from estate_forum.models.user import User
from estate_forum.schemas.post import PostCreate, PostResponse, PostUpdate
from estate_forum.services import graph, queries
from estate_forum.services.estates import can_manage

logger = logging.getLogger(__name__)


@store_guard("Failed to create post")
def create_post(db: Session, author_id: str, post_data: PostCreate) -> Result[PostResponse]:
    """Insert a post, then link it to its author and, if given, its estate."""
    failure = require_id(author_id, "user id")
    if failure:
        return failure
    if db.get(User, author_id) is None:
        return not_found(f"User {author_id} not found")
    if post_data.estate_id is not None:
        failure = require_id(post_data.estate_id, "estate id")
        if failure:
            return failure
        if db.get(Estate, post_data.estate_id) is None:
            return not_found(f"Estate {post_data.estate_id} not found")

    post = Post(
        title=post_data.title,
        content=post_data.content,
        author_id=author_id,
        estate_id=post_data.estate_id,
        comment_ids=[],
    )
    db.add(post)
    db.commit()

    linked = graph.add_post_to_user(db, author_id, post.id)
    if isinstance(linked, Failure):
        return linked
    if post.estate_id is not None:
        linked = graph.add_post_to_estate(db, post.estate_id, post.id)
        if isinstance(linked, Failure):
            return linked

    logger.info("User %s created post %s", author_id, post.id)
    return queries.get_post(db, post.id)


@store_guard("Failed to update post")
def update_post(db: Session, post_id: str, actor: User, post_data: PostUpdate) -> Result[PostResponse]:
    """Change a post's title and content."""
    failure = require_id(post_id, "post id")
    if failure:
        return failure
    post = db.get(Post, post_id)
    if post is None:
        return not_found(f"Post {post_id} not found")
    if not can_manage(actor, post.author_id):
        return forbidden("Only the author can update this post")

    post.title = post_data.title
    post.content = post_data.content
    db.commit()
    return queries.get_post(db, post_id)


@store_guard("Failed to remove post")
def remove_post(db: Session, post_id: str, actor: User) -> Result[bool]:
    failure = require_id(post_id, "post id")
    if failure:
        return failure
    post = db.get(Post, post_id)
    if post is None:
        return not_found(f"Post {post_id} not found")
    if not can_manage(actor, post.author_id):
        return forbidden("Only the author can remove this post")
    return graph.delete_post(db, post_id)
