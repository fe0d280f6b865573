"""Comment collection model."""

from datetime import UTC, datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from estate_forum.core.database import Base
from estate_forum.core.ids import new_object_id


class Comment(Base):
    """Comment left on a post."""

    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    content: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        index=True,
    )

    author_id: Mapped[str] = mapped_column(String(24), index=True)
    post_id: Mapped[str] = mapped_column(String(24), index=True)
