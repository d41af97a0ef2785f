"""
Schedule Schemas

Time windows shared by access control groups and attendance definitions.

A window applies either to a weekday (day_of_week 1-7, ISO numbering) or to
a specific date. Omitted times are filled per window type: group windows
span the whole day, attendance windows default to working hours.
"""

import datetime
from typing import ClassVar

from pydantic import Field, model_validator

from access_control.config.constants import (
    ATTENDANCE_DAY_END,
    ATTENDANCE_DAY_START,
    FULL_DAY_END,
    FULL_DAY_START,
)
from access_control.schemas.common import BaseSchema, RequestSchema


class ScheduleWindow(RequestSchema):
    """Day or date plus a start/end time."""

    day_of_week: int | None = Field(
        None, ge=1, le=7, description="ISO weekday, 1 = Monday ... 7 = Sunday"
    )
    date: datetime.date | None = Field(None, description="Specific date (YYYY-MM-DD)")
    start_time: datetime.time | None = Field(None, description="HH:MM:SS")
    end_time: datetime.time | None = Field(None, description="HH:MM:SS")

    # Overridden by subclasses
    default_start: ClassVar[datetime.time] = FULL_DAY_START
    default_end: ClassVar[datetime.time] = FULL_DAY_END

    @model_validator(mode="after")
    def check_window(self) -> "ScheduleWindow":
        """Fill missing times and check the window is well formed."""
        if self.day_of_week is None and self.date is None:
            raise ValueError("schedule requires day_of_week or date")
        if self.start_time is None:
            self.start_time = self.default_start
        if self.end_time is None:
            self.end_time = self.default_end
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self

    def to_row(self) -> dict:
        """Column values for the child row."""
        return {
            "day_of_week": self.day_of_week,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }


class GroupScheduleIn(ScheduleWindow):
    """Access window for a group; missing times span the whole day."""


class AttendanceScheduleIn(ScheduleWindow):
    """Working window with grace offsets; missing times default to 08:00-16:00."""

    early_in_minutes: int = Field(0, ge=0)
    late_in_minutes: int = Field(0, ge=0)
    early_out_minutes: int = Field(0, ge=0)
    late_out_minutes: int = Field(0, ge=0)

    default_start: ClassVar[datetime.time] = ATTENDANCE_DAY_START
    default_end: ClassVar[datetime.time] = ATTENDANCE_DAY_END

    def to_row(self) -> dict:
        """Column values for the child row, grace offsets included."""
        return {
            **super().to_row(),
            "early_in_minutes": self.early_in_minutes,
            "late_in_minutes": self.late_in_minutes,
            "early_out_minutes": self.early_out_minutes,
            "late_out_minutes": self.late_out_minutes,
        }


class GroupScheduleResponse(BaseSchema):
    """Stored group window."""

    id: str
    day_of_week: int | None
    date: datetime.date | None
    start_time: datetime.time
    end_time: datetime.time


class AttendanceScheduleResponse(GroupScheduleResponse):
    """Stored attendance window."""

    early_in_minutes: int
    late_in_minutes: int
    early_out_minutes: int
    late_out_minutes: int
