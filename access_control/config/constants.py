"""
Application Constants

Centralized constants used throughout the application.
"""

from datetime import time
from enum import Enum


class EntityStatus(str, Enum):
    """Operational status for servers, devices and users."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class PersonType(str, Enum):
    """Kinds of people enrolled in the access control system."""

    EMPLOYEE = "employee"
    VISITOR = "visitor"


class AccessRecordType(str, Enum):
    """Direction of a passage through a device."""

    IN = "in"
    OUT = "out"


class AccessRecordResult(str, Enum):
    """Outcome reported by the device for one passage."""

    SUCCESS = "success"
    FAILED = "failed"
    UNKNOWN = "unknown"


class Permission(str, Enum):
    """
    Capability flags carried by a user's permission bundle.

    Each value is the column name on UserPermission, so a flag can be
    looked up with getattr(permission, Permission.X.value).
    """

    PEOPLE = "people_permission"
    DEVICE = "device_permission"
    RULE = "rule_permission"
    TIME_ATTENDANCE = "time_attendance_permission"
    REPORT = "report_permission"
    NOTIFICATION = "notification_permission"
    SYSTEM_LOG = "system_log_permission"


# =============================================================================
# SCHEDULE DEFAULTS
# =============================================================================

# ISO weekday numbering: 1 = Monday ... 7 = Sunday
DAYS_OF_WEEK: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7)

# Unrestricted window used when a schedule collection is omitted
FULL_DAY_START = time(0, 0, 0)
FULL_DAY_END = time(23, 59, 59)

# Working hours used when a single attendance window omits its times
ATTENDANCE_DAY_START = time(8, 0, 0)
ATTENDANCE_DAY_END = time(16, 0, 0)


# =============================================================================
# RESOURCE NAMES
# =============================================================================

# Human-readable names used in error messages and logs
RESOURCE_SERVER = "Access control server"
RESOURCE_DEVICE = "Access control device"
RESOURCE_GROUP = "Access control group"
RESOURCE_RULE = "Access control rule"
RESOURCE_ATTENDANCE = "Attendance"
RESOURCE_PERSON = "Person"
RESOURCE_USER = "User"
RESOURCE_ACCESS_RECORD = "Access record"
