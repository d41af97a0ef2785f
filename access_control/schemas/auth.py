"""
Auth Schemas

Request/response models for authentication endpoints.
"""

from pydantic import BaseModel

from access_control.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login request schema."""

    username: str
    password: str


class AuthResponse(BaseModel):
    """Access token plus the logged-in user."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
