"""Shared fixtures: in-memory store, API client, factories and the graph checker."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from estate_forum.core.database import Base, get_db
from estate_forum.main import app
from estate_forum.models import Comment, Estate, Post, User
from helpers import Factory


@pytest.fixture
def test_db():
    """Create an in-memory test database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(test_db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def factory(test_db) -> Factory:
    return Factory(test_db)


@pytest.fixture
def assert_graph_consistent(test_db):
    """Check that every stored reference resolves and is mirrored on the other side."""

    def check() -> None:
        test_db.expire_all()
        users = {u.id: u for u in test_db.scalars(select(User))}
        estates_ = {e.id: e for e in test_db.scalars(select(Estate))}
        posts_ = {p.id: p for p in test_db.scalars(select(Post))}
        comments_ = {c.id: c for c in test_db.scalars(select(Comment))}

        for user in users.values():
            for estate_id in user.estate_ids:
                assert estate_id in estates_
                assert estates_[estate_id].user_id == user.id
            for post_id in user.post_ids:
                assert post_id in posts_
                assert posts_[post_id].author_id == user.id
            for comment_id in user.comment_ids:
                assert comment_id in comments_
                assert comments_[comment_id].author_id == user.id
            for estate_id in user.favorite_estate_ids:
                assert estate_id in estates_
                assert user.id in estates_[estate_id].favorited_by_users_ids
            assert len(set(user.favorite_estate_ids)) == len(user.favorite_estate_ids)

        for estate in estates_.values():
            if estate.user_id in users:
                assert users[estate.user_id].estate_ids.count(estate.id) == 1
            for post_id in estate.post_ids:
                assert post_id in posts_
                assert posts_[post_id].estate_id == estate.id
            for user_id in estate.favorited_by_users_ids:
                assert user_id in users
                assert estate.id in users[user_id].favorite_estate_ids
            assert len(set(estate.favorited_by_users_ids)) == len(estate.favorited_by_users_ids)

        for post in posts_.values():
            for comment_id in post.comment_ids:
                assert comment_id in comments_
                assert comments_[comment_id].post_id == post.id
            if post.estate_id is not None and post.estate_id in estates_:
                assert post.id in estates_[post.estate_id].post_ids
            if post.author_id in users:
                assert post.id in users[post.author_id].post_ids

        for comment in comments_.values():
            if comment.post_id in posts_:
                assert comment.id in posts_[comment.post_id].comment_ids
            if comment.author_id in users:
                assert comment.id in users[comment.author_id].comment_ids

    return check
