"""
Access Control Server Endpoints

CRUD operations for access control servers. Requires the device permission.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from access_control.api.dependencies import DbSession, DeviceManager
from access_control.api.utils import validate_uuid
from access_control.schemas.common import PaginatedResponse, PaginationMeta, PaginationParams
from access_control.schemas.server import (
    ServerCreate,
    ServerPatch,
    ServerResponse,
    ServerUpdate,
)
from access_control.services.server_service import ServerService


router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[ServerResponse],
    summary="List servers",
)
async def list_servers(
    _current_user: DeviceManager,
    db: DbSession,
    pagination: Annotated[PaginationParams, Depends()],
    name: Annotated[Optional[str], Query()] = None,
    host_address: Annotated[Optional[str], Query()] = None,
) -> PaginatedResponse[ServerResponse]:
    servers, total = await ServerService(db).list_servers(
        offset=pagination.offset,
        limit=pagination.limit,
        name=name,
        host_address=host_address,
    )
    return PaginatedResponse[ServerResponse](
        data=servers,
        pagination=PaginationMeta.create(
            page=pagination.page, per_page=pagination.per_page, total=total
        ),
    )


@router.post(
    "",
    response_model=ServerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create server",
)
async def create_server(
    data: ServerCreate,
    _current_user: DeviceManager,
    db: DbSession,
) -> ServerResponse:
    return await ServerService(db).create_server(data)


@router.get("/{server_id}", response_model=ServerResponse, summary="Get server")
async def get_server(
    server_id: str,
    _current_user: DeviceManager,
    db: DbSession,
) -> ServerResponse:
    server_uuid = validate_uuid(server_id, "server_id")
    return await ServerService(db).get_server(server_uuid)


@router.put("/{server_id}", response_model=ServerResponse, summary="Replace server")
async def update_server(
    server_id: str,
    data: ServerUpdate,
    _current_user: DeviceManager,
    db: DbSession,
) -> ServerResponse:
    server_uuid = validate_uuid(server_id, "server_id")
    return await ServerService(db).update_server(server_uuid, data)


@router.patch("/{server_id}", response_model=ServerResponse, summary="Update server")
async def partial_update_server(
    server_id: str,
    data: ServerPatch,
    _current_user: DeviceManager,
    db: DbSession,
) -> ServerResponse:
    server_uuid = validate_uuid(server_id, "server_id")
    return await ServerService(db).partial_update_server(server_uuid, data)


@router.delete(
    "/{server_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete server",
    description="Soft delete a server.",
)
async def delete_server(
    server_id: str,
    _current_user: DeviceManager,
    db: DbSession,
) -> None:
    server_uuid = validate_uuid(server_id, "server_id")
    await ServerService(db).delete_server(server_uuid)
