"""
Access Control Device Schemas

Request/response models for device endpoints.
"""

from datetime import datetime

from pydantic import Field

from access_control.config.constants import EntityStatus
from access_control.schemas.common import BaseSchema, RequestSchema
from access_control.schemas.server import ServerInfo


class DeviceCreate(RequestSchema):
    """Schema for creating a device."""

    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=100, description="e.g. face_scanner")
    host_address: str = Field(..., min_length=1, max_length=255)
    username: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=255)
    access_token: str | None = Field(None, max_length=1024)
    api_token: str | None = Field(None, max_length=1024)
    access_control_server_id: str | None = None
    record_scan: bool = False
    record_attendance: bool = False
    allow_clock_in: bool = False
    allow_clock_out: bool = False
    status: EntityStatus = EntityStatus.ACTIVE


class DeviceUpdate(DeviceCreate):
    """Schema for replacing a device (PUT)."""


class DevicePatch(RequestSchema):
    """Schema for partially updating a device (PATCH)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    type: str | None = Field(None, min_length=1, max_length=100)
    host_address: str | None = Field(None, min_length=1, max_length=255)
    username: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=255)
    access_token: str | None = Field(None, max_length=1024)
    api_token: str | None = Field(None, max_length=1024)
    access_control_server_id: str | None = None
    record_scan: bool | None = None
    record_attendance: bool | None = None
    allow_clock_in: bool | None = None
    allow_clock_out: bool | None = None
    status: EntityStatus | None = None


class DeviceResponse(BaseSchema):
    """Schema for device response."""

    id: str
    name: str
    type: str
    host_address: str
    username: str | None
    access_control_server: ServerInfo | None
    record_scan: bool
    record_attendance: bool
    allow_clock_in: bool
    allow_clock_out: bool
    status: EntityStatus
    created_at: datetime
    updated_at: datetime
