"""User, authentication and favorite routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from estate_forum.api.dependencies import get_current_user, unwrap
from estate_forum.core.database import get_db
from estate_forum.models.user import User
from estate_forum.schemas.user import AuthResponse, LoginRequest, UserCreate, UserResponse, UserUpdate
from estate_forum.services import favorites, graph, users

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)) -> AuthResponse:
    """Register a new user."""
    return unwrap(users.register_user(db, user_data))


@router.post("/login", response_model=AuthResponse)
def login(login_data: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Login and receive a JWT access token."""
    return unwrap(users.login_user(db, login_data))


@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)


@router.put("/me", response_model=UserResponse)
def update_current_user(
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    return unwrap(users.update_user(db, current_user.id, user_data))


@router.post("/me/favorites/{estate_id}", response_model=bool)
def add_to_favorites(
    estate_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> bool:
    """Add an estate to the current user's favorites."""
    return unwrap(graph.add_favorite(db, current_user.id, estate_id))


@router.delete("/me/favorites/{estate_id}", response_model=bool)
def remove_from_favorites(
    estate_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> bool:
    """Remove an estate from the current user's favorites."""
    return unwrap(graph.remove_favorite(db, current_user.id, estate_id))


@router.get("/me/favorites/{estate_id}/can-add", response_model=bool)
def can_add_to_favorites(
    estate_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> bool:
    return unwrap(favorites.can_add_to_favorite(db, current_user.id, estate_id))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)) -> UserResponse:
    """Get a user by ID."""
    return unwrap(users.get_user(db, user_id))
