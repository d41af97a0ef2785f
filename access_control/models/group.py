"""
Access Control Group Models

A group bundles devices with the weekly windows in which they may be used.

    AccessControlGroup (parent)
        ├── AccessControlGroupDevice   (N) → references AccessControlDevice
        └── AccessControlGroupSchedule (N) → day-of-week or date window

Child rows are owned by exactly one group and are rewritten wholesale on
every create/update of the group.

SAMPLE GROUP SCHEDULE ROWS (default 24/7 policy):
┌──────────────────────────────────────────────────────────────────────────────┐
│ day_of_week │ date │ start_time │ end_time                                   │
├─────────────┼──────┼────────────┼────────────────────────────────────────────┤
│ 1           │ null │ 00:00:00   │ 23:59:59                                   │
│ ...         │ ...  │ ...        │ ...                                        │
│ 7           │ null │ 00:00:00   │ 23:59:59                                   │
└──────────────────────────────────────────────────────────────────────────────┘
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


class AccessControlGroup(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    """Named set of devices plus the schedule during which they open."""

    __tablename__ = "access_control_groups"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index(
            "uq_access_control_groups_name",
            "name",
            unique=True,
            postgresql_where=(Column("deleted_at").is_(None)),
            sqlite_where=(Column("deleted_at").is_(None)),
        ),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<AccessControlGroup(id={self.id}, name={self.name})>"


class AccessControlGroupDevice(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Membership of a device in a group."""

    __tablename__ = "access_control_group_devices"

    access_control_group_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
        doc="Owning group",
    )
    access_control_device_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        doc="Referenced device (may dangle if the device is later deleted)",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<AccessControlGroupDevice(group={self.access_control_group_id}, "
            f"device={self.access_control_device_id})>"
        )


class AccessControlGroupSchedule(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A time window during which the group's devices grant access."""

    __tablename__ = "access_control_group_schedules"

    access_control_group_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
        doc="Owning group",
    )
    day_of_week: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        doc="ISO weekday 1 (Monday) to 7 (Sunday); NULL when date is set",
    )
    date: Mapped[datetime.date | None] = mapped_column(
        Date,
        nullable=True,
        doc="Specific calendar date the window applies to",
    )
    start_time: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    end_time: Mapped[datetime.time] = mapped_column(Time, nullable=False)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<AccessControlGroupSchedule(group={self.access_control_group_id}, "
            f"day={self.day_of_week}, {self.start_time}-{self.end_time})>"
        )
