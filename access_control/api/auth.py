"""
Authentication Endpoints

Login and current-user lookup for dashboard users.
"""

from uuid import UUID

from fastapi import APIRouter

from access_control.api.dependencies import CurrentUser, DbSession
from access_control.core.exceptions import AuthenticationError
from access_control.core.logging import logger
from access_control.core.security import create_access_token, verify_password
from access_control.db.repositories import UserRepository
from access_control.schemas.auth import AuthResponse, LoginRequest
from access_control.schemas.user import UserResponse
from access_control.services.user_service import UserService


router = APIRouter()


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, db: DbSession) -> AuthResponse:
    """Authenticate a user and return an access token with user details.

    Raises:
        AuthenticationError: Unknown user, inactive user or wrong password
    """
    user = await UserRepository(db).get_by_username(request.username)

    if not user or not user.is_active:
        logger.warning("Login rejected", username=request.username)
        raise AuthenticationError("Invalid credentials")

    if not verify_password(request.password, user.password_hash):
        logger.warning("Login rejected", username=request.username)
        raise AuthenticationError("Invalid credentials")

    access_token = create_access_token({"sub": str(user.id), "username": user.username})
    logger.info("User logged in", user_id=str(user.id))

    return AuthResponse(
        access_token=access_token,
        user=await UserService(db).get_user(user.id),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser, db: DbSession) -> UserResponse:
    """Return the authenticated user with their permission bundle."""
    return await UserService(db).get_user(UUID(current_user["id"]))
