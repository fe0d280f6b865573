"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from estate_forum.api.routes import comments, estates, health, posts, users
from estate_forum.core.config import settings
from estate_forum.core.database import Base, engine
from estate_forum.core.logging_config import get_logger, setup_logging

# Import models for Base.metadata.create_all
from estate_forum.models import (  # noqa: F401
    comment,
    estate,
    post,
    user,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    Base.metadata.create_all(bind=engine)
    logger.info("Starting %s v%s", settings.PROJECT_NAME, settings.VERSION)
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Estate listings and forum API",
    lifespan=lifespan,
)

app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(users.router, prefix="/api")
app.include_router(estates.router, prefix="/api")
app.include_router(posts.router, prefix="/api")
app.include_router(comments.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "estate_forum.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
