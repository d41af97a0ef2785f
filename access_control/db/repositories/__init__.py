"""
Repository Layer

Repository hierarchy:

    BaseRepository[ModelType]          (generic CRUD, live-record aware)
        ├── ServerRepository
        ├── DeviceRepository
        ├── GroupRepository
        ├── RuleRepository
        ├── AttendanceRepository
        ├── PersonRepository
        ├── UserRepository
        ├── AccessRecordRepository   (adds an access_time window)
        └── AssociationRepository[ChildType]   (child rows keyed by parent id)
"""

from access_control.db.repositories.access_record_repository import AccessRecordRepository
from access_control.db.repositories.association_repository import AssociationRepository
from access_control.db.repositories.attendance_repository import AttendanceRepository
from access_control.db.repositories.base import BaseRepository
from access_control.db.repositories.device_repository import DeviceRepository
from access_control.db.repositories.group_repository import GroupRepository
from access_control.db.repositories.person_repository import PersonRepository
from access_control.db.repositories.rule_repository import RuleRepository
from access_control.db.repositories.server_repository import ServerRepository
from access_control.db.repositories.user_repository import UserRepository

__all__ = [
    "AccessRecordRepository",
    "AssociationRepository",
    "AttendanceRepository",
    "BaseRepository",
    "DeviceRepository",
    "GroupRepository",
    "PersonRepository",
    "RuleRepository",
    "ServerRepository",
    "UserRepository",
]
