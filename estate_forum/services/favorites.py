"""Favorite/ownership policy."""

from collections.abc import Iterable

from sqlalchemy.orm import Session

from estate_forum.core.ids import require_id
from estate_forum.core.result import Failure, Ok, Result, conflict, forbidden, not_found, store_guard
from estate_forum.models.estate import Estate
from estate_forum.models.user import User


def can_favorite(
    user_id: str,
    estate: Estate,
    favorite_estate_ids: Iterable[str] = (),
) -> Result[None]:
    """Decide whether ``user_id`` may add ``estate`` to their favorites.

    Owners may never favorite their own estate (Forbidden) and an estate can be
    a favorite only once (Conflict). The check looks at both sides of the
    relation, so a half-written favorite still counts as existing.
    """
    if estate.user_id == user_id:
        return forbidden("You cannot add your own estate to favorites")
    if user_id in (estate.favorited_by_users_ids or []) or estate.id in favorite_estate_ids:
        return conflict("Estate is already in favorites")
    return Ok(None)


@store_guard("Failed to check whether the estate can be added to favorites")
def can_add_to_favorite(db: Session, user_id: str, estate_id: str) -> Result[bool]:
    """Read-only pre-check for offering the favorite action."""
    for value, name in ((user_id, "user id"), (estate_id, "estate id")):
        failure = require_id(value, name)
        if failure:
            return failure

    user = db.get(User, user_id)
    if user is None:
        return not_found(f"User {user_id} not found")
    estate = db.get(Estate, estate_id)
    if estate is None:
        return not_found(f"Estate {estate_id} not found")

    decision = can_favorite(user_id, estate, user.favorite_estate_ids or [])
    return Ok(not isinstance(decision, Failure))
