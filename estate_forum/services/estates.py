"""Estate creation, updates and removal."""

import logging

from sqlalchemy.orm import Session

from estate_forum.core.ids import require_id
from estate_forum.core.result import Failure, Result, forbidden, not_found, store_guard, validation
from estate_forum.models.enums import EstateCategory, UserRole
from estate_forum.models.estate import Estate
from estate_forum.models.user import User
from estate_forum.schemas.estate import EstateCreate, EstateResponse, EstateUpdate
from estate_forum.services import graph, queries

logger = logging.getLogger(__name__)


def validate_estate_fields(
    category: EstateCategory,
    floor_number: int | None,
    price: float,
    square_meters: int,
    total_rooms: int,
    longitude: float,
    latitude: float,
) -> Failure | None:
    """Check the owner-controlled fields of an estate."""
    if floor_number is None and not category.is_standalone:
        return validation(f"floor_number is required for category {category.value}")
    if price < 0:
        return validation("price must not be negative")
    if square_meters <= 0:
        return validation("square_meters must be greater than 0")
    if total_rooms <= 0:
        return validation("total_rooms must be greater than 0")
    if not -180 <= longitude <= 180:
        return validation("longitude must be between -180 and 180")
    if not -90 <= latitude <= 90:
        return validation("latitude must be between -90 and 90")
    return None


def can_manage(actor: User, owner_id: str) -> bool:
    """Owners manage their own documents; admins manage everything."""
    return actor.id == owner_id or actor.role == UserRole.ADMIN


@store_guard("Failed to create estate")
def create_estate(db: Session, owner_id: str, estate_data: EstateCreate) -> Result[EstateResponse]:
    """Insert an estate and link it to its owner."""
    failure = require_id(owner_id, "user id")
    if failure:
        return failure
    if db.get(User, owner_id) is None:
        return not_found(f"User {owner_id} not found")

    failure = validate_estate_fields(
        estate_data.category,
        estate_data.floor_number,
        estate_data.price,
        estate_data.square_meters,
        estate_data.total_rooms,
        estate_data.longitude,
        estate_data.latitude,
    )
    if failure:
        return failure

    estate = Estate(
        **estate_data.model_dump(),
        user_id=owner_id,
        post_ids=[],
        favorited_by_users_ids=[],
    )
    db.add(estate)
    db.commit()

    linked = graph.link_estate_to_user(db, estate.id, owner_id)
    if isinstance(linked, Failure):
        return linked

    logger.info("User %s created estate %s", owner_id, estate.id)
    return queries.get_estate(db, estate.id)


@store_guard("Failed to update estate")
def update_estate(
    db: Session,
    estate_id: str,
    actor: User,
    estate_data: EstateUpdate,
) -> Result[EstateResponse]:
    """Apply owner-controlled field changes; owner and reference lists never change."""
    failure = require_id(estate_id, "estate id")
    if failure:
        return failure
    estate = db.get(Estate, estate_id)
    if estate is None:
        return not_found(f"Estate {estate_id} not found")
    if not can_manage(actor, estate.user_id):
        return forbidden("Only the owner can update this estate")

    update_data = {
        field: value
        for field, value in estate_data.model_dump(exclude_unset=True).items()
        if value is not None or field == "floor_number"
    }
    merged = {
        field: update_data.get(field, getattr(estate, field))
        for field in (
            "category",
            "floor_number",
            "price",
            "square_meters",
            "total_rooms",
            "longitude",
            "latitude",
        )
    }
    failure = validate_estate_fields(**merged)
    if failure:
        return failure

    for field, value in update_data.items():
        setattr(estate, field, value)

    db.commit()
    return queries.get_estate(db, estate_id)


@store_guard("Failed to remove estate")
def remove_estate(db: Session, estate_id: str, actor: User) -> Result[bool]:
    """Delete an estate and everything that hangs off it."""
    failure = require_id(estate_id, "estate id")
    if failure:
        return failure
    estate = db.get(Estate, estate_id)
    if estate is None:
        return not_found(f"Estate {estate_id} not found")
    if not can_manage(actor, estate.user_id):
        return forbidden("Only the owner can remove this estate")
    return graph.delete_estate(db, estate_id)
