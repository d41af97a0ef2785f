"""
Attendance Schemas

Request/response models for attendance endpoints.

schedules omitted or null on create/full update expands to seven full-day
windows with every grace offset at zero; an explicit [] stores no windows.
"""

from datetime import datetime

from pydantic import Field

from access_control.schemas.common import BaseSchema, RequestSchema
from access_control.schemas.schedule import (
    AttendanceScheduleIn,
    AttendanceScheduleResponse,
)


class AttendanceCreate(RequestSchema):
    """Schema for creating an attendance definition."""

    name: str = Field(..., min_length=1, max_length=255)
    schedules: list[AttendanceScheduleIn] | None = None


class AttendanceUpdate(AttendanceCreate):
    """Schema for replacing an attendance definition (PUT)."""


class AttendancePatch(RequestSchema):
    """Schema for partially updating an attendance definition (PATCH)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    schedules: list[AttendanceScheduleIn] | None = None


class AttendanceResponse(BaseSchema):
    """Schema for attendance response."""

    id: str
    name: str
    schedules: list[AttendanceScheduleResponse]
    created_at: datetime
    updated_at: datetime
