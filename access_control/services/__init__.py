"""Entity Services.

Business logic layer: one service per entity type, each combining the
repositories with the consistency engine inside a Transaction.
"""

from access_control.services.access_record_service import AccessRecordService
from access_control.services.attendance_service import AttendanceService
from access_control.services.device_service import DeviceService
from access_control.services.group_service import GroupService
from access_control.services.person_service import PersonService
from access_control.services.rule_service import RuleService
from access_control.services.server_service import ServerService
from access_control.services.user_service import UserService

__all__ = [
    "ServerService",
    "DeviceService",
    "GroupService",
    "RuleService",
    "AttendanceService",
    "PersonService",
    "UserService",
    "AccessRecordService",
]
