"""
Access Control Server Model

An access control server is the upstream controller that devices report to.
Servers are leaf entities: they own no child rows and are soft deleted.

SAMPLE SERVER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ name             │ "HQ Controller"                                           │
│ host_address     │ "10.0.0.10"                                               │
│ username         │ "admin"                                                   │
│ status           │ "active"                                                  │
│ last_sync_at     │ 2024-01-15T10:00:00Z                                      │
│ deleted_at       │ null                                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from sqlalchemy import Column, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from access_control.config.constants import EntityStatus
from access_control.models.base import (
    Base,
    EnumValidationMixin,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class AccessControlServer(
    Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, EnumValidationMixin
):
    """
    Access control server.

    Attributes:
        id: Unique identifier (UUID v4)
        name: Display name, unique among live servers
        host_address: Network address, unique among live servers
        username / password / access_token / api_token: Credentials for the controller API
        status: active or inactive
        last_sync_at: When the server was last synchronised
    """

    __tablename__ = "access_control_servers"

    _enum_fields: ClassVar[dict[str, type[Enum]]] = {
        "status": EntityStatus,
    }

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    host_address: Mapped[str] = mapped_column(String(255), nullable=False)

    # ==========================================================================
    # CREDENTIALS
    # ==========================================================================

    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    access_token: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    api_token: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # ==========================================================================
    # STATUS
    # ==========================================================================

    status: Mapped[str] = mapped_column(
        String(20),
        default=EntityStatus.ACTIVE.value,
        nullable=False,
    )
    last_sync_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        Index(
            "uq_access_control_servers_name",
            "name",
            unique=True,
            postgresql_where=(Column("deleted_at").is_(None)),
            sqlite_where=(Column("deleted_at").is_(None)),
        ),
        Index(
            "uq_access_control_servers_host_address",
            "host_address",
            unique=True,
            postgresql_where=(Column("deleted_at").is_(None)),
            sqlite_where=(Column("deleted_at").is_(None)),
        ),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<AccessControlServer(id={self.id}, name={self.name})>"
