"""
Default Child Sets

Requests may omit a child collection entirely. Omitted (None) and empty ([])
mean different things:

    schedules omitted → seven full-day windows, Monday (1) to Sunday (7)
    schedules: []     → no windows at all

Reference lists (device ids, group ids, cards, plates) have no default
content; omitted becomes an empty list.

The expand_* helpers return a copy of the request with every omitted
collection filled, so services can treat the result as a complete set.
"""

from access_control.config.constants import DAYS_OF_WEEK, FULL_DAY_END, FULL_DAY_START
from access_control.schemas.attendance import AttendanceCreate
from access_control.schemas.group import GroupCreate
from access_control.schemas.person import PersonCreate
from access_control.schemas.rule import RuleCreate
from access_control.schemas.schedule import AttendanceScheduleIn, GroupScheduleIn


def default_access_schedules() -> list[GroupScheduleIn]:
    """Seven windows, one per weekday, 00:00:00 to 23:59:59."""
    return [
        GroupScheduleIn(
            day_of_week=day,
            start_time=FULL_DAY_START,
            end_time=FULL_DAY_END,
        )
        for day in DAYS_OF_WEEK
    ]


def default_attendance_schedules() -> list[AttendanceScheduleIn]:
    """Seven full-day windows with every grace offset at zero."""
    return [
        AttendanceScheduleIn(
            day_of_week=day,
            start_time=FULL_DAY_START,
            end_time=FULL_DAY_END,
            early_in_minutes=0,
            late_in_minutes=0,
            early_out_minutes=0,
            late_out_minutes=0,
        )
        for day in DAYS_OF_WEEK
    ]


def expand_group_defaults(data: GroupCreate) -> GroupCreate:
    return data.model_copy(
        update={
            "device_ids": [] if data.device_ids is None else data.device_ids,
            "schedules": (
                default_access_schedules() if data.schedules is None else data.schedules
            ),
        }
    )


def expand_rule_defaults(data: RuleCreate) -> RuleCreate:
    return data.model_copy(
        update={"group_ids": [] if data.group_ids is None else data.group_ids}
    )


def expand_attendance_defaults(data: AttendanceCreate) -> AttendanceCreate:
    return data.model_copy(
        update={
            "schedules": (
                default_attendance_schedules()
                if data.schedules is None
                else data.schedules
            ),
        }
    )


def expand_person_defaults(data: PersonCreate) -> PersonCreate:
    return data.model_copy(
        update={
            "card_numbers": [] if data.card_numbers is None else data.card_numbers,
            "license_plate_texts": (
                [] if data.license_plate_texts is None else data.license_plate_texts
            ),
        }
    )
