"""
Attendance Endpoints

CRUD operations for attendance definitions and their working windows.
Requires the time attendance permission.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from access_control.api.dependencies import AttendanceManager, DbSession
from access_control.api.utils import validate_uuid
from access_control.schemas.attendance import (
    AttendanceCreate,
    AttendancePatch,
    AttendanceResponse,
    AttendanceUpdate,
)
from access_control.schemas.common import PaginatedResponse, PaginationMeta, PaginationParams
from access_control.services.attendance_service import AttendanceService


router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[AttendanceResponse],
    summary="List attendance definitions",
)
async def list_attendances(
    _current_user: AttendanceManager,
    db: DbSession,
    pagination: Annotated[PaginationParams, Depends()],
    name: Annotated[Optional[str], Query(description="Name contains")] = None,
) -> PaginatedResponse[AttendanceResponse]:
    items, total = await AttendanceService(db).list_attendances(
        offset=pagination.offset,
        limit=pagination.limit,
        name=name,
    )
    return PaginatedResponse[AttendanceResponse](
        data=items,
        pagination=PaginationMeta.create(
            page=pagination.page, per_page=pagination.per_page, total=total
        ),
    )


@router.post(
    "",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create attendance definition",
    description="Omitted schedules default to seven full-day windows with zero grace.",
)
async def create_attendance(
    data: AttendanceCreate,
    _current_user: AttendanceManager,
    db: DbSession,
) -> AttendanceResponse:
    return await AttendanceService(db).create_attendance(data)


@router.get(
    "/{attendance_id}",
    response_model=AttendanceResponse,
    summary="Get attendance definition",
)
async def get_attendance(
    attendance_id: str,
    _current_user: AttendanceManager,
    db: DbSession,
) -> AttendanceResponse:
    attendance_uuid = validate_uuid(attendance_id, "attendance_id")
    return await AttendanceService(db).get_attendance(attendance_uuid)


@router.put(
    "/{attendance_id}",
    response_model=AttendanceResponse,
    summary="Replace attendance definition",
)
async def update_attendance(
    attendance_id: str,
    data: AttendanceUpdate,
    _current_user: AttendanceManager,
    db: DbSession,
) -> AttendanceResponse:
    attendance_uuid = validate_uuid(attendance_id, "attendance_id")
    return await AttendanceService(db).update_attendance(attendance_uuid, data)


@router.patch(
    "/{attendance_id}",
    response_model=AttendanceResponse,
    summary="Update attendance definition",
)
async def partial_update_attendance(
    attendance_id: str,
    data: AttendancePatch,
    _current_user: AttendanceManager,
    db: DbSession,
) -> AttendanceResponse:
    attendance_uuid = validate_uuid(attendance_id, "attendance_id")
    return await AttendanceService(db).partial_update_attendance(attendance_uuid, data)


@router.delete(
    "/{attendance_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete attendance definition",
)
async def delete_attendance(
    attendance_id: str,
    _current_user: AttendanceManager,
    db: DbSession,
) -> None:
    attendance_uuid = validate_uuid(attendance_id, "attendance_id")
    await AttendanceService(db).delete_attendance(attendance_uuid)
