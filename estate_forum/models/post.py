"""Post collection model."""

from datetime import UTC, datetime

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from estate_forum.core.database import Base
from estate_forum.core.ids import new_object_id


class Post(Base):
    """Forum post, optionally about an estate."""

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    # Bumped on every write; id-list updates are conditional on it
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(200), index=True)
    content: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        index=True,
    )

    author_id: Mapped[str] = mapped_column(String(24), index=True)
    estate_id: Mapped[str | None] = mapped_column(String(24), nullable=True, index=True)

    # Reference list, mutated only by services.graph
    comment_ids: Mapped[list[str]] = mapped_column(JSON, default=list)

    __mapper_args__ = {"version_id_col": version_id}
