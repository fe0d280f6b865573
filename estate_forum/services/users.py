"""User registration, login and profile updates."""

import logging
import re

from sqlalchemy.orm import Session

from estate_forum.core.ids import require_id
from estate_forum.core.result import Ok, Result, conflict, forbidden, not_found, store_guard, validation
from estate_forum.models.enums import UserRole
from estate_forum.models.user import User
from estate_forum.schemas.user import AuthResponse, LoginRequest, UserCreate, UserResponse, UserUpdate
from estate_forum.services.auth import (
    authenticate_user,
    create_access_token,
    get_password_hash,
    get_user_by_email,
    get_user_by_username,
)

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9._]+")


def _auth_response(user: User) -> AuthResponse:
    token = create_access_token(data={"sub": user.id})
    return AuthResponse(
        **UserResponse.model_validate(user).model_dump(),
        access_token=token,
    )


@store_guard("Failed to register user")
def register_user(db: Session, user_data: UserCreate) -> Result[AuthResponse]:
    """Create an account and return it with an access token."""
    if not USERNAME_PATTERN.fullmatch(user_data.username):
        return validation("Username may contain only letters, digits, '_' and '.'")
    if not user_data.password:
        return validation("Password is required")
    if get_user_by_username(db, user_data.username):
        return conflict("Username is already taken")
    if get_user_by_email(db, user_data.email):
        return conflict("Email is already registered")

    user = User(
        username=user_data.username,
        email=user_data.email,
        phone_number=user_data.phone_number,
        hashed_password=get_password_hash(user_data.password),
        role=UserRole.USER,
        estate_ids=[],
        post_ids=[],
        comment_ids=[],
        favorite_estate_ids=[],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return Ok(_auth_response(user))


@store_guard("Failed to log in")
def login_user(db: Session, login_data: LoginRequest) -> Result[AuthResponse]:
    user = authenticate_user(db, login_data.email, login_data.password)
    if user is None:
        return forbidden("Incorrect email or password")
    return Ok(_auth_response(user))


@store_guard("Failed to load user")
def get_user(db: Session, user_id: str) -> Result[UserResponse]:
    failure = require_id(user_id, "user id")
    if failure:
        return failure
    user = db.get(User, user_id)
    if user is None:
        return not_found(f"User {user_id} not found")
    return Ok(UserResponse.model_validate(user))


@store_guard("Failed to update user")
def update_user(db: Session, user_id: str, user_data: UserUpdate) -> Result[UserResponse]:
    """Change the username and phone number; reference lists are untouched."""
    failure = require_id(user_id, "user id")
    if failure:
        return failure
    user = db.get(User, user_id)
    if user is None:
        return not_found(f"User {user_id} not found")
    if not USERNAME_PATTERN.fullmatch(user_data.username):
        return validation("Username may contain only letters, digits, '_' and '.'")

    existing = get_user_by_username(db, user_data.username)
    if existing is not None and existing.id != user_id:
        return conflict("Username is already taken")

    user.username = user_data.username
    user.phone_number = user_data.phone_number
    db.commit()
    db.refresh(user)
    return Ok(UserResponse.model_validate(user))
