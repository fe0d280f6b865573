"""User collection model."""

from sqlalchemy import JSON, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from estate_forum.core.database import Base
from estate_forum.core.ids import new_object_id
from estate_forum.models.enums import UserRole


class User(Base):
    """Registered account; owns estates, posts and comments by id."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    # Bumped on every write; id-list updates are conditional on it
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    phone_number: Mapped[str] = mapped_column(String(30))
    hashed_password: Mapped[str] = mapped_column(String(255))
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), default=UserRole.USER)

    # Reference lists, mutated only by services.graph
    estate_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    post_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    comment_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    favorite_estate_ids: Mapped[list[str]] = mapped_column(JSON, default=list)

    __mapper_args__ = {"version_id_col": version_id}
