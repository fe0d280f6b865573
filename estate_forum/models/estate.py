"""Estate collection model."""

from sqlalchemy import JSON, Enum, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from estate_forum.core.database import Base
from estate_forum.core.ids import new_object_id
from estate_forum.models.enums import EstateCategory


class Estate(Base):
    """Listed estate, owned by the user in ``user_id``."""

    __tablename__ = "estates"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    # Bumped on every write; id-list updates are conditional on it
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str] = mapped_column(Text)
    price: Mapped[float] = mapped_column(Float, index=True)
    square_meters: Mapped[int] = mapped_column(Integer)
    total_rooms: Mapped[int] = mapped_column(Integer)
    category: Mapped[EstateCategory] = mapped_column(Enum(EstateCategory), index=True)
    floor_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    images: Mapped[list[str]] = mapped_column(JSON, default=list)
    longitude: Mapped[float] = mapped_column(Float, default=0.0)
    latitude: Mapped[float] = mapped_column(Float, default=0.0)

    # Owner; immutable after creation
    user_id: Mapped[str] = mapped_column(String(24), index=True)

    # Reference lists, mutated only by services.graph
    post_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    favorited_by_users_ids: Mapped[list[str]] = mapped_column(JSON, default=list)

    __mapper_args__ = {"version_id_col": version_id}
