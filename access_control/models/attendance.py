"""
Attendance Models

An attendance definition describes expected working windows, used to judge
clock-in and clock-out events.

    Attendance (parent)
        └── AttendanceSchedule (N) → window plus four grace offsets

Grace offsets (minutes, all >= 0):
- early_in_minutes:  how early before start_time a clock-in still counts
- late_in_minutes:   how late after start_time a clock-in is still on time
- early_out_minutes: how early before end_time a clock-out is accepted
- late_out_minutes:  how late after end_time a clock-out still counts
"""

import datetime
import uuid

from sqlalchemy import Column, Date, Index, Integer, String, Time
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from access_control.models.base import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class Attendance(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    """Named time-attendance definition."""

    __tablename__ = "attendances"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index(
            "uq_attendances_name",
            "name",
            unique=True,
            postgresql_where=(Column("deleted_at").is_(None)),
            sqlite_where=(Column("deleted_at").is_(None)),
        ),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Attendance(id={self.id}, name={self.name})>"


class AttendanceSchedule(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A working window with grace offsets."""

    __tablename__ = "attendance_schedules"

    attendance_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
        doc="Owning attendance definition",
    )
    day_of_week: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    start_time: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    end_time: Mapped[datetime.time] = mapped_column(Time, nullable=False)

    # ==========================================================================
    # GRACE OFFSETS (minutes)
    # ==========================================================================

    early_in_minutes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    late_in_minutes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    early_out_minutes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    late_out_minutes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<AttendanceSchedule(attendance={self.attendance_id}, "
            f"day={self.day_of_week}, {self.start_time}-{self.end_time})>"
        )
