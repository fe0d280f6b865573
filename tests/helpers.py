"""Assertion helpers for result values and document factories."""

from sqlalchemy.orm import Session

from estate_forum.core.result import ErrorKind, Failure, Ok
from estate_forum.models import Comment, Estate, EstateCategory, Post, User
from estate_forum.schemas.comment import CommentCreate
from estate_forum.schemas.estate import EstateCreate
from estate_forum.schemas.post import PostCreate
from estate_forum.services import comments, estates, posts


def expect_ok(result):
    """Unwrap a successful result, failing the test otherwise."""
    assert isinstance(result, Ok), f"expected Ok, got {result!r}"
    return result.value


def expect_failure(result, kind: ErrorKind) -> Failure:
    """Assert the result is a failure of the given kind."""
    assert isinstance(result, Failure), f"expected Failure, got {result!r}"
    assert result.kind == kind, result.message
    return result


class Factory:
    """Creates documents through the same services the API uses."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self._counter = 0

    def user(self, username: str | None = None) -> User:
        self._counter += 1
        username = username or f"user{self._counter}"
        user = User(
            username=username,
            email=f"{username}@example.com",
            phone_number="060123456",
            hashed_password="not-a-real-hash",
            estate_ids=[],
            post_ids=[],
            comment_ids=[],
            favorite_estate_ids=[],
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def estate(self, owner: User, **overrides) -> Estate:
        data = {
            "title": "Flat in the center",
            "description": "Two rooms, renovated",
            "price": 150.0,
            "square_meters": 55,
            "total_rooms": 2,
            "category": EstateCategory.FLAT,
            "floor_number": 3,
            "images": ["/EstateImages/a.jpg"],
            "longitude": 21.9,
            "latitude": 43.3,
        }
        data.update(overrides)
        view = expect_ok(estates.create_estate(self.db, owner.id, EstateCreate(**data)))
        return self.db.get(Estate, view.id)

    def post(self, author: User, estate: Estate | None = None, title: str = "Question") -> Post:
        post_data = PostCreate(
            title=title,
            content="Is the price negotiable?",
            estate_id=estate.id if estate else None,
        )
        view = expect_ok(posts.create_post(self.db, author.id, post_data))
        return self.db.get(Post, view.id)

    def comment(self, author: User, post: Post, content: str = "Yes it is") -> Comment:
        comment_data = CommentCreate(post_id=post.id, content=content)
        view = expect_ok(comments.create_comment(self.db, author.id, comment_data))
        return self.db.get(Comment, view.id)
