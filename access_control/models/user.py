"""
User Models

A user is a dashboard operator. Each user owns exactly one permission bundle
that decides which resource families they may manage.

    User (parent)
        └── UserPermission (1) → seven boolean capability flags

The permission row is replaced wholesale on create and full update, exactly
like the 1:N child collections of other parents.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 770e8400-e29b-41d4-a716-446655440002                      │
│ username         │ "admin"                                                   │
│ password_hash    │ "$2b$12$LQv3c1yqBw..."  (bcrypt hash)                     │
│ status           │ "active"                                                  │
│ deleted_at       │ null                                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

import uuid
from enum import Enum
from typing import ClassVar

from sqlalchemy import Boolean, Column, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from access_control.config.constants import EntityStatus, Permission
from access_control.models.base import (
    Base,
    EnumValidationMixin,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class User(
    Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, EnumValidationMixin
):
    """
    Dashboard user.

    Attributes:
        username: Login name, unique among live users
        password_hash: Bcrypt hash for login
        status: active or inactive; inactive users cannot log in
    """

    __tablename__ = "users"

    _enum_fields: ClassVar[dict[str, type[Enum]]] = {
        "status": EntityStatus,
    }

    username: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default=EntityStatus.ACTIVE.value,
        nullable=False,
    )

    __table_args__ = (
        Index(
            "uq_users_username",
            "username",
            unique=True,
            postgresql_where=(Column("deleted_at").is_(None)),
            sqlite_where=(Column("deleted_at").is_(None)),
        ),
    )

    @property
    def is_active(self) -> bool:
        """Check if the user may log in."""
        return self.status == EntityStatus.ACTIVE.value and not self.is_deleted

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, username={self.username})>"


class UserPermission(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Capability flags for one user."""

    __tablename__ = "user_permissions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        unique=True,
        doc="Owning user (one permission row per user)",
    )

    people_permission: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    device_permission: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rule_permission: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    time_attendance_permission: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    report_permission: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    notification_permission: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    system_log_permission: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    def allows(self, permission: Permission) -> bool:
        """Check a single capability flag."""
        return bool(getattr(self, permission.value))

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<UserPermission(user={self.user_id})>"
