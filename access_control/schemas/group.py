"""
Access Control Group Schemas

Request/response models for group endpoints.

Collections follow absent-vs-empty semantics on create and full update:
- device_ids omitted or null  → no devices
- schedules omitted or null   → seven 24-hour windows (Monday to Sunday)
- schedules: []               → no windows at all
On PATCH an omitted collection is left untouched.
"""

from datetime import datetime

from pydantic import Field

from access_control.schemas.common import BaseSchema, RequestSchema
from access_control.schemas.schedule import GroupScheduleIn, GroupScheduleResponse


class GroupCreate(RequestSchema):
    """Schema for creating a group."""

    name: str = Field(..., min_length=1, max_length=255)
    device_ids: list[str] | None = Field(None, description="Device UUIDs")
    schedules: list[GroupScheduleIn] | None = Field(
        None, description="Access windows; omitted means 24/7"
    )


class GroupUpdate(GroupCreate):
    """Schema for replacing a group (PUT): same shape and defaults as create."""


class GroupPatch(RequestSchema):
    """Schema for partially updating a group (PATCH)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    device_ids: list[str] | None = None
    schedules: list[GroupScheduleIn] | None = None


class DeviceInfo(BaseSchema):
    """Device as shown inside a group."""

    id: str
    name: str
    host_address: str


class GroupResponse(BaseSchema):
    """Schema for group response."""

    id: str
    name: str
    devices: list[DeviceInfo]
    schedules: list[GroupScheduleResponse]
    created_at: datetime
    updated_at: datetime
