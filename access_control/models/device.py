"""
Access Control Device Model

A device is a physical reader or controller (door, turnstile, barrier).
Devices are referenced by group memberships (AccessControlGroupDevice) but
those references do not cascade: soft deleting a device leaves memberships
pointing at it, and read views skip them.

SAMPLE DEVICE RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                        │ 660e8400-e29b-41d4-a716-446655440001             │
│ name                      │ "Lobby Turnstile 1"                              │
│ type                      │ "face_scanner"                                   │
│ host_address              │ "10.0.1.21"                                      │
│ access_control_server_id  │ 550e8400-e29b-41d4-a716-446655440000             │
│ record_scan               │ true                                             │
│ record_attendance         │ true                                             │
│ allow_clock_in            │ true                                             │
│ allow_clock_out           │ false                                            │
│ status                    │ "active"                                         │
└──────────────────────────────────────────────────────────────────────────────┘
"""

import uuid
from enum import Enum
from typing import ClassVar

from sqlalchemy import Boolean, Column, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from access_control.config.constants import EntityStatus
from access_control.models.base import (
    Base,
    EnumValidationMixin,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class AccessControlDevice(
    Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, EnumValidationMixin
):
    """
    Access control device.

    Attributes:
        name: Display name, unique among live devices
        type: Free-form device type (e.g. "face_scanner", "card_reader")
        host_address: Network address, unique among live devices
        access_control_server_id: Optional controlling server
        record_scan / record_attendance / allow_clock_in / allow_clock_out: Behaviour flags
        status: active or inactive
    """

    __tablename__ = "access_control_devices"

    _enum_fields: ClassVar[dict[str, type[Enum]]] = {
        "status": EntityStatus,
    }

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    host_address: Mapped[str] = mapped_column(String(255), nullable=False)

    # ==========================================================================
    # CREDENTIALS
    # ==========================================================================

    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    access_token: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    api_token: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # ==========================================================================
    # REFERENCES
    # ==========================================================================

    # Validated in code; no FK so a server can be soft deleted independently
    access_control_server_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        nullable=True,
        index=True,
    )

    # ==========================================================================
    # BEHAVIOUR FLAGS
    # ==========================================================================

    record_scan: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    record_attendance: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    allow_clock_in: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    allow_clock_out: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        default=EntityStatus.ACTIVE.value,
        nullable=False,
    )

    __table_args__ = (
        Index(
            "uq_access_control_devices_name",
            "name",
            unique=True,
            postgresql_where=(Column("deleted_at").is_(None)),
            sqlite_where=(Column("deleted_at").is_(None)),
        ),
        Index(
            "uq_access_control_devices_host_address",
            "host_address",
            unique=True,
            postgresql_where=(Column("deleted_at").is_(None)),
            sqlite_where=(Column("deleted_at").is_(None)),
        ),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<AccessControlDevice(id={self.id}, name={self.name})>"
