"""
Access Control Device Endpoints

CRUD operations for access control devices. Requires the device permission.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from access_control.api.dependencies import DbSession, DeviceManager
from access_control.api.utils import validate_uuid
from access_control.schemas.common import PaginatedResponse, PaginationMeta, PaginationParams
from access_control.schemas.device import (
    DeviceCreate,
    DevicePatch,
    DeviceResponse,
    DeviceUpdate,
)
from access_control.services.device_service import DeviceService


router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[DeviceResponse],
    summary="List devices",
)
async def list_devices(
    _current_user: DeviceManager,
    db: DbSession,
    pagination: Annotated[PaginationParams, Depends()],
    name: Annotated[Optional[str], Query()] = None,
    type: Annotated[Optional[str], Query()] = None,
    host_address: Annotated[Optional[str], Query()] = None,
) -> PaginatedResponse[DeviceResponse]:
    devices, total = await DeviceService(db).list_devices(
        offset=pagination.offset,
        limit=pagination.limit,
        name=name,
        type=type,
        host_address=host_address,
    )
    return PaginatedResponse[DeviceResponse](
        data=devices,
        pagination=PaginationMeta.create(
            page=pagination.page, per_page=pagination.per_page, total=total
        ),
    )


@router.post(
    "",
    response_model=DeviceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create device",
)
async def create_device(
    data: DeviceCreate,
    _current_user: DeviceManager,
    db: DbSession,
) -> DeviceResponse:
    """Create a device.

    Raises:
        400: Invalid body or malformed server id
        404: Server not found
        409: Name or host address already in use
    """
    return await DeviceService(db).create_device(data)


@router.get("/{device_id}", response_model=DeviceResponse, summary="Get device")
async def get_device(
    device_id: str,
    _current_user: DeviceManager,
    db: DbSession,
) -> DeviceResponse:
    device_uuid = validate_uuid(device_id, "device_id")
    return await DeviceService(db).get_device(device_uuid)


@router.put("/{device_id}", response_model=DeviceResponse, summary="Replace device")
async def update_device(
    device_id: str,
    data: DeviceUpdate,
    _current_user: DeviceManager,
    db: DbSession,
) -> DeviceResponse:
    device_uuid = validate_uuid(device_id, "device_id")
    return await DeviceService(db).update_device(device_uuid, data)


@router.patch("/{device_id}", response_model=DeviceResponse, summary="Update device")
async def partial_update_device(
    device_id: str,
    data: DevicePatch,
    _current_user: DeviceManager,
    db: DbSession,
) -> DeviceResponse:
    device_uuid = validate_uuid(device_id, "device_id")
    return await DeviceService(db).partial_update_device(device_uuid, data)


@router.delete(
    "/{device_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete device",
    description="Soft delete a device. Group memberships are kept and hidden.",
)
async def delete_device(
    device_id: str,
    _current_user: DeviceManager,
    db: DbSession,
) -> None:
    device_uuid = validate_uuid(device_id, "device_id")
    await DeviceService(db).delete_device(device_uuid)
