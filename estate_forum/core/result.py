"""Result types shared by every service operation.

Expected failures (missing documents, bad input, policy rejections) are
returned as ``Failure`` values instead of raised. Callers check
``isinstance(result, Failure)`` and pass the failure up unchanged, so a
cascade stops at the first failure and reports it verbatim.
"""

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, ParamSpec, TypeVar, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

T = TypeVar("T")
P = ParamSpec("P")

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Failure categories understood by every caller."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    INTERNAL = "internal"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True)
class Failure:
    """Failed outcome with a category and a human-readable message."""

    kind: ErrorKind
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


Result = Union[Ok[T], Failure]


def not_found(message: str) -> Failure:
    return Failure(ErrorKind.NOT_FOUND, message)


def validation(message: str) -> Failure:
    return Failure(ErrorKind.VALIDATION, message)


def forbidden(message: str) -> Failure:
    return Failure(ErrorKind.FORBIDDEN, message)


def conflict(message: str) -> Failure:
    return Failure(ErrorKind.CONFLICT, message)


def internal(message: str) -> Failure:
    return Failure(ErrorKind.INTERNAL, message)


def store_guard(message: str) -> Callable[[Callable[P, Result[T]]], Callable[P, Result[T]]]:
    """Turn store-level errors raised inside a service call into ``Internal`` failures.

    The decorated function must take the store session as its first argument.
    The session is rolled back so it stays usable for the caller.
    """

    def decorator(func: Callable[P, Result[T]]) -> Callable[P, Result[T]]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
            try:
                return func(*args, **kwargs)
            except SQLAlchemyError:
                logger.exception("Store failure in %s", func.__name__)
                db = args[0] if args else None
                if isinstance(db, Session):
                    db.rollback()
                return internal(message)

        return wrapper

    return decorator
