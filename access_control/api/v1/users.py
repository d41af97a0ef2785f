"""
User Management Endpoints

CRUD operations for dashboard users and their permission bundles.
Any authenticated user may manage users.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from access_control.api.dependencies import CurrentUser, DbSession
from access_control.api.utils import validate_uuid
from access_control.schemas.common import PaginatedResponse, PaginationMeta, PaginationParams
from access_control.schemas.user import UserCreate, UserPatch, UserResponse, UserUpdate
from access_control.services.user_service import UserService


router = APIRouter()


@router.get("", response_model=PaginatedResponse[UserResponse], summary="List users")
async def list_users(
    _current_user: CurrentUser,
    db: DbSession,
    pagination: Annotated[PaginationParams, Depends()],
    username: Annotated[Optional[str], Query(description="Username contains")] = None,
) -> PaginatedResponse[UserResponse]:
    users, total = await UserService(db).list_users(
        offset=pagination.offset,
        limit=pagination.limit,
        username=username,
    )
    return PaginatedResponse[UserResponse](
        data=users,
        pagination=PaginationMeta.create(
            page=pagination.page, per_page=pagination.per_page, total=total
        ),
    )


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Create a dashboard user. The permission bundle is required.",
)
async def create_user(
    data: UserCreate,
    _current_user: CurrentUser,
    db: DbSession,
) -> UserResponse:
    return await UserService(db).create_user(data)


@router.get("/{user_id}", response_model=UserResponse, summary="Get user")
async def get_user(
    user_id: str,
    _current_user: CurrentUser,
    db: DbSession,
) -> UserResponse:
    user_uuid = validate_uuid(user_id, "user_id")
    return await UserService(db).get_user(user_uuid)


@router.put("/{user_id}", response_model=UserResponse, summary="Replace user")
async def update_user(
    user_id: str,
    data: UserUpdate,
    _current_user: CurrentUser,
    db: DbSession,
) -> UserResponse:
    user_uuid = validate_uuid(user_id, "user_id")
    return await UserService(db).update_user(user_uuid, data)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    description="Only provided fields and permission flags change.",
)
async def partial_update_user(
    user_id: str,
    data: UserPatch,
    _current_user: CurrentUser,
    db: DbSession,
) -> UserResponse:
    user_uuid = validate_uuid(user_id, "user_id")
    return await UserService(db).partial_update_user(user_uuid, data)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
)
async def delete_user(
    user_id: str,
    _current_user: CurrentUser,
    db: DbSession,
) -> None:
    user_uuid = validate_uuid(user_id, "user_id")
    await UserService(db).delete_user(user_uuid)
