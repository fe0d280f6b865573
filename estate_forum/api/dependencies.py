"""Request dependencies and result-to-HTTP mapping."""

from typing import TypeVar

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from estate_forum.core.database import get_db
from estate_forum.core.result import Failure, Result
from estate_forum.models.user import User
from estate_forum.services.auth import decode_token

T = TypeVar("T")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/users/login")


def unwrap(result: Result[T]) -> T:
    """Return the success value or raise the matching HTTP error."""
    if isinstance(result, Failure):
        raise HTTPException(status_code=result.kind.http_status, detail=result.message)
    return result.value


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an existing user."""
    token_data = decode_token(token)
    user = db.get(User, token_data.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
