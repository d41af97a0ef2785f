"""
Access Control Group Endpoints

CRUD operations for groups with their device memberships and schedules.
Requires the rule permission.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from access_control.api.dependencies import DbSession, RuleManager
from access_control.api.utils import validate_uuid
from access_control.schemas.common import PaginatedResponse, PaginationMeta, PaginationParams
from access_control.schemas.group import GroupCreate, GroupPatch, GroupResponse, GroupUpdate
from access_control.services.group_service import GroupService


router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[GroupResponse],
    summary="List groups",
)
async def list_groups(
    _current_user: RuleManager,
    db: DbSession,
    pagination: Annotated[PaginationParams, Depends()],
    name: Annotated[Optional[str], Query(description="Name contains")] = None,
) -> PaginatedResponse[GroupResponse]:
    """List live groups with pagination and optional name filter."""
    groups, total = await GroupService(db).list_groups(
        offset=pagination.offset,
        limit=pagination.limit,
        name=name,
    )
    return PaginatedResponse[GroupResponse](
        data=groups,
        pagination=PaginationMeta.create(
            page=pagination.page, per_page=pagination.per_page, total=total
        ),
    )


@router.post(
    "",
    response_model=GroupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create group",
    description="Create a group. Omitted schedules default to 24/7 access.",
)
async def create_group(
    data: GroupCreate,
    _current_user: RuleManager,
    db: DbSession,
) -> GroupResponse:
    return await GroupService(db).create_group(data)


@router.get("/{group_id}", response_model=GroupResponse, summary="Get group")
async def get_group(
    group_id: str,
    _current_user: RuleManager,
    db: DbSession,
) -> GroupResponse:
    """Get a group by ID.

    Raises:
        400: Invalid UUID format
        404: Group not found
    """
    group_uuid = validate_uuid(group_id, "group_id")
    return await GroupService(db).get_group(group_uuid)


@router.put(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Replace group",
    description="Replace name, devices and schedules. Omitted schedules default to 24/7.",
)
async def update_group(
    group_id: str,
    data: GroupUpdate,
    _current_user: RuleManager,
    db: DbSession,
) -> GroupResponse:
    group_uuid = validate_uuid(group_id, "group_id")
    return await GroupService(db).update_group(group_uuid, data)


@router.patch(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Update group",
    description="Only provided fields change; provided collections are replaced.",
)
async def partial_update_group(
    group_id: str,
    data: GroupPatch,
    _current_user: RuleManager,
    db: DbSession,
) -> GroupResponse:
    group_uuid = validate_uuid(group_id, "group_id")
    return await GroupService(db).partial_update_group(group_uuid, data)


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete group",
    description="Delete a group together with its memberships and schedules.",
)
async def delete_group(
    group_id: str,
    _current_user: RuleManager,
    db: DbSession,
) -> None:
    group_uuid = validate_uuid(group_id, "group_id")
    await GroupService(db).delete_group(group_uuid)
