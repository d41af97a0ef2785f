"""
Access Record Endpoints

CRUD operations for access records. Requires the report permission.
"""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from access_control.api.dependencies import DbSession, ReportViewer
from access_control.api.utils import validate_uuid
from access_control.config.constants import AccessRecordResult, AccessRecordType
from access_control.schemas.access_record import (
    AccessRecordCreate,
    AccessRecordPatch,
    AccessRecordResponse,
    AccessRecordUpdate,
)
from access_control.schemas.common import PaginatedResponse, PaginationMeta, PaginationParams
from access_control.services.access_record_service import AccessRecordService


router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[AccessRecordResponse],
    summary="List access records",
    description="Newest first. since is inclusive, until is exclusive.",
)
async def list_access_records(
    _current_user: ReportViewer,
    db: DbSession,
    pagination: Annotated[PaginationParams, Depends()],
    person_id: Annotated[Optional[str], Query()] = None,
    access_control_device_id: Annotated[Optional[str], Query()] = None,
    type: Annotated[Optional[AccessRecordType], Query()] = None,
    result: Annotated[Optional[AccessRecordResult], Query()] = None,
    since: Annotated[Optional[datetime], Query()] = None,
    until: Annotated[Optional[datetime], Query()] = None,
) -> PaginatedResponse[AccessRecordResponse]:
    records, total = await AccessRecordService(db).list_access_records(
        offset=pagination.offset,
        limit=pagination.limit,
        person_id=person_id,
        access_control_device_id=access_control_device_id,
        type=type,
        result=result,
        since=since,
        until=until,
    )
    return PaginatedResponse[AccessRecordResponse](
        data=records,
        pagination=PaginationMeta.create(
            page=pagination.page, per_page=pagination.per_page, total=total
        ),
    )


@router.post(
    "",
    response_model=AccessRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create access record",
)
async def create_access_record(
    data: AccessRecordCreate,
    _current_user: ReportViewer,
    db: DbSession,
) -> AccessRecordResponse:
    """Create an access record.

    Raises:
        400: Invalid body, type, result or malformed reference id
        404: Person or device not found
    """
    return await AccessRecordService(db).create_access_record(data)


@router.get(
    "/{record_id}",
    response_model=AccessRecordResponse,
    summary="Get access record",
)
async def get_access_record(
    record_id: str,
    _current_user: ReportViewer,
    db: DbSession,
) -> AccessRecordResponse:
    record_uuid = validate_uuid(record_id, "record_id")
    return await AccessRecordService(db).get_access_record(record_uuid)


@router.put(
    "/{record_id}",
    response_model=AccessRecordResponse,
    summary="Replace access record",
)
async def update_access_record(
    record_id: str,
    data: AccessRecordUpdate,
    _current_user: ReportViewer,
    db: DbSession,
) -> AccessRecordResponse:
    record_uuid = validate_uuid(record_id, "record_id")
    return await AccessRecordService(db).update_access_record(record_uuid, data)


@router.patch(
    "/{record_id}",
    response_model=AccessRecordResponse,
    summary="Update access record",
)
async def partial_update_access_record(
    record_id: str,
    data: AccessRecordPatch,
    _current_user: ReportViewer,
    db: DbSession,
) -> AccessRecordResponse:
    record_uuid = validate_uuid(record_id, "record_id")
    return await AccessRecordService(db).partial_update_access_record(record_uuid, data)


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete access record",
)
async def delete_access_record(
    record_id: str,
    _current_user: ReportViewer,
    db: DbSession,
) -> None:
    record_uuid = validate_uuid(record_id, "record_id")
    await AccessRecordService(db).delete_access_record(record_uuid)
