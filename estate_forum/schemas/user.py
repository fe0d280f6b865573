"""User Pydantic schemas for request/response validation."""

from pydantic import BaseModel, EmailStr

from estate_forum.models.enums import UserRole


class UserBase(BaseModel):
    """Base user schema."""

    username: str
    email: EmailStr
    phone_number: str


class UserCreate(UserBase):
    """Schema for registering a new user."""

    password: str


class UserUpdate(BaseModel):
    """Schema for updating the fields a user controls."""

    username: str
    phone_number: str


class UserResponse(UserBase):
    """Schema for user response."""

    id: str
    role: UserRole = UserRole.USER

    model_config = {"from_attributes": True}


class AuthResponse(UserResponse):
    """User data returned together with an access token."""

    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    """Schema for token payload data."""

    user_id: str | None = None


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: str
    password: str
