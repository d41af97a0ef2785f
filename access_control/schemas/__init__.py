"""
Pydantic Schemas

Request/response models for API endpoints.
"""

from access_control.schemas.access_record import (
    AccessRecordCreate,
    AccessRecordPatch,
    AccessRecordResponse,
    AccessRecordUpdate,
)
from access_control.schemas.attendance import (
    AttendanceCreate,
    AttendancePatch,
    AttendanceResponse,
    AttendanceUpdate,
)
from access_control.schemas.auth import AuthResponse, LoginRequest
from access_control.schemas.common import (
    HealthResponse,
    NamedReference,
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
)
from access_control.schemas.device import (
    DeviceCreate,
    DevicePatch,
    DeviceResponse,
    DeviceUpdate,
)
from access_control.schemas.group import (
    DeviceInfo,
    GroupCreate,
    GroupPatch,
    GroupResponse,
    GroupUpdate,
)
from access_control.schemas.person import (
    PersonCreate,
    PersonPatch,
    PersonResponse,
    PersonUpdate,
)
from access_control.schemas.rule import RuleCreate, RulePatch, RuleResponse, RuleUpdate
from access_control.schemas.schedule import (
    AttendanceScheduleIn,
    AttendanceScheduleResponse,
    GroupScheduleIn,
    GroupScheduleResponse,
)
from access_control.schemas.server import (
    ServerCreate,
    ServerInfo,
    ServerPatch,
    ServerResponse,
    ServerUpdate,
)
from access_control.schemas.user import (
    PermissionIn,
    PermissionPatch,
    PermissionResponse,
    UserCreate,
    UserPatch,
    UserResponse,
    UserUpdate,
)

__all__ = [
    # Auth
    "LoginRequest",
    "AuthResponse",
    # Common
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResponse",
    "HealthResponse",
    "NamedReference",
    # Schedules
    "GroupScheduleIn",
    "GroupScheduleResponse",
    "AttendanceScheduleIn",
    "AttendanceScheduleResponse",
    # Server
    "ServerCreate",
    "ServerUpdate",
    "ServerPatch",
    "ServerInfo",
    "ServerResponse",
    # Device
    "DeviceCreate",
    "DeviceUpdate",
    "DevicePatch",
    "DeviceResponse",
    # Group
    "GroupCreate",
    "GroupUpdate",
    "GroupPatch",
    "DeviceInfo",
    "GroupResponse",
    # Rule
    "RuleCreate",
    "RuleUpdate",
    "RulePatch",
    "RuleResponse",
    # Attendance
    "AttendanceCreate",
    "AttendanceUpdate",
    "AttendancePatch",
    "AttendanceResponse",
    # Person
    "PersonCreate",
    "PersonUpdate",
    "PersonPatch",
    "PersonResponse",
    # User
    "PermissionIn",
    "PermissionPatch",
    "PermissionResponse",
    "UserCreate",
    "UserUpdate",
    "UserPatch",
    "UserResponse",
    # Access record
    "AccessRecordCreate",
    "AccessRecordUpdate",
    "AccessRecordPatch",
    "AccessRecordResponse",
]
