"""
User Schemas

Request/response models for user endpoints.
Users are dashboard operators; what they may manage is decided by the
permission bundle stored alongside each user.

The bundle is mandatory on create and full update. On PATCH only the
flags that are sent change; the rest keep their stored value.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from access_control.config.constants import EntityStatus
from access_control.schemas.common import BaseSchema, RequestSchema


class PermissionIn(BaseModel):
    """Full permission bundle; missing flags are false."""

    people_permission: bool = False
    device_permission: bool = False
    rule_permission: bool = False
    time_attendance_permission: bool = False
    report_permission: bool = False
    notification_permission: bool = False
    system_log_permission: bool = False


class PermissionPatch(BaseModel):
    """Subset of permission flags to change."""

    people_permission: bool | None = None
    device_permission: bool | None = None
    rule_permission: bool | None = None
    time_attendance_permission: bool | None = None
    report_permission: bool | None = None
    notification_permission: bool | None = None
    system_log_permission: bool | None = None


class UserCreate(RequestSchema):
    """Schema for creating a user."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, description="Password for dashboard login")
    status: EntityStatus = EntityStatus.ACTIVE
    permission: PermissionIn


class UserUpdate(RequestSchema):
    """Schema for replacing a user (PUT). The password changes only when sent."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str | None = Field(None, min_length=8)
    status: EntityStatus = EntityStatus.ACTIVE
    permission: PermissionIn


class UserPatch(RequestSchema):
    """Schema for partially updating a user (PATCH)."""

    username: str | None = Field(None, min_length=1, max_length=255)
    password: str | None = Field(None, min_length=8)
    status: EntityStatus | None = None
    permission: PermissionPatch | None = None


class PermissionResponse(BaseSchema):
    """Stored permission bundle."""

    id: str
    people_permission: bool
    device_permission: bool
    rule_permission: bool
    time_attendance_permission: bool
    report_permission: bool
    notification_permission: bool
    system_log_permission: bool


class UserResponse(BaseSchema):
    """Schema for user response. The password hash is never returned."""

    id: str
    username: str
    status: EntityStatus
    permission: PermissionResponse | None
    created_at: datetime
    updated_at: datetime
