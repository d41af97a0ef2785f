"""
SQLAlchemy Models

Entity hierarchy:

    AccessControlServer
    AccessControlDevice ──────────────► AccessControlServer (optional)
    AccessControlGroup
        ├── AccessControlGroupDevice ─► AccessControlDevice
        └── AccessControlGroupSchedule
    AccessControlRule
        └── AccessControlRuleGroup ───► AccessControlGroup
    Attendance
        └── AttendanceSchedule
    Person ───────────────────────────► AccessControlRule, Attendance (optional)
        ├── PersonCard
        └── PersonLicensePlate
    User
        └── UserPermission (1:1)
    AccessRecord ─────────────────────► Person, AccessControlDevice (optional)
"""

from access_control.models.access_record import AccessRecord
from access_control.models.attendance import Attendance, AttendanceSchedule
from access_control.models.base import Base, SoftDeleteMixin, TimestampMixin
from access_control.models.device import AccessControlDevice
from access_control.models.group import (
    AccessControlGroup,
    AccessControlGroupDevice,
    AccessControlGroupSchedule,
)
from access_control.models.person import Person, PersonCard, PersonLicensePlate
from access_control.models.rule import AccessControlRule, AccessControlRuleGroup
from access_control.models.server import AccessControlServer
from access_control.models.user import User, UserPermission

__all__ = [
    "Base",
    "TimestampMixin",
    "SoftDeleteMixin",
    "AccessControlServer",
    "AccessControlDevice",
    "AccessControlGroup",
    "AccessControlGroupDevice",
    "AccessControlGroupSchedule",
    "AccessControlRule",
    "AccessControlRuleGroup",
    "Attendance",
    "AttendanceSchedule",
    "Person",
    "PersonCard",
    "PersonLicensePlate",
    "User",
    "UserPermission",
    "AccessRecord",
]
