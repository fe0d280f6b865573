"""Document identifiers: opaque 24-hex-character ObjectId strings."""

from bson import ObjectId

from estate_forum.core.result import Failure, validation


def new_object_id() -> str:
    """Generate a fresh document id."""
    return str(ObjectId())


def is_object_id(value: object) -> bool:
    """Check whether ``value`` is a well-formed document id string."""
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)


def require_id(value: str | None, name: str) -> Failure | None:
    """Return a validation failure if ``value`` is not a document id."""
    if not is_object_id(value):
        return validation(f"Invalid {name}: {value!r}")
    return None
