"""Document store configuration and session management.

Every collection is a table without foreign keys; cross-document references
live in JSON id-list columns and are maintained by ``services.graph``.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from estate_forum.core.config import settings


def _connect_args(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}  # Needed for SQLite
    return {}


# Created once at process start, shared by every request
engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for all collection models."""

    pass


def get_db():
    """Dependency for getting a store session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
