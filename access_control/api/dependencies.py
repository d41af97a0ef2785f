"""
API Dependencies

Common dependencies for the admin API: database session, bearer token
authentication and per-resource permission checks.
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from access_control.config.constants import Permission
from access_control.core.exceptions import AuthenticationError, AuthorizationError
from access_control.core.logging import log_context
from access_control.core.security import decode_token
from access_control.db.repositories import UserRepository
from access_control.db.session import get_db
from access_control.services.user_service import UserService


# Security scheme for Swagger UI - shows "Authorize" button
security_scheme = HTTPBearer(auto_error=False)


async def get_current_user_token(
    credentials: Annotated[
        Optional[HTTPAuthorizationCredentials], Depends(security_scheme)
    ],
) -> dict:
    """Extract and validate JWT token from Authorization header.

    Raises:
        AuthenticationError: If token is missing or invalid
    """
    if not credentials:
        raise AuthenticationError("Authorization header required")

    payload = decode_token(credentials.credentials)

    if not payload or payload.get("type") != "access":
        raise AuthenticationError("Invalid or expired token")

    return payload


async def get_current_user(
    token: Annotated[dict, Depends(get_current_user_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Get current authenticated user with their permission flags.

    Returns:
        User data dict: id, username, permissions (flag name -> bool)

    Raises:
        AuthenticationError: If user not found or inactive
    """
    user_id = token.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    try:
        user_uuid = UUID(user_id)
    except ValueError as e:
        raise AuthenticationError("Invalid token payload") from e

    user = await UserRepository(db).get_live(user_uuid)
    if not user or not user.is_active:
        raise AuthenticationError("User not found or inactive")

    permission = await UserService(db).get_permission(user.id)
    log_context(user_id=str(user.id), username=user.username)

    return {
        "id": str(user.id),
        "username": user.username,
        "permissions": {
            flag.value: bool(permission and permission.allows(flag))
            for flag in Permission
        },
    }


def require_permission(permission: Permission):
    """Dependency factory to require one capability flag.

    Args:
        permission: Flag the current user must hold

    Returns:
        Dependency function
    """

    async def check_permission(
        current_user: Annotated[dict, Depends(get_current_user)],
    ) -> dict:
        if not current_user["permissions"].get(permission.value):
            raise AuthorizationError(
                f"This action requires the '{permission.value}' permission"
            )
        return current_user

    return check_permission


# Type aliases for cleaner signatures
CurrentUser = Annotated[dict, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
PeopleManager = Annotated[dict, Depends(require_permission(Permission.PEOPLE))]
DeviceManager = Annotated[dict, Depends(require_permission(Permission.DEVICE))]
RuleManager = Annotated[dict, Depends(require_permission(Permission.RULE))]
AttendanceManager = Annotated[
    dict, Depends(require_permission(Permission.TIME_ATTENDANCE))
]
ReportViewer = Annotated[dict, Depends(require_permission(Permission.REPORT))]
