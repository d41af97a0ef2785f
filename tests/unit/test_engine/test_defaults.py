"""
Default Child Set Tests

Unit tests for the expansion of omitted collections.
"""

from datetime import time

from access_control.engine.defaults import (
    default_access_schedules,
    default_attendance_schedules,
    expand_attendance_defaults,
    expand_group_defaults,
    expand_person_defaults,
    expand_rule_defaults,
)
from access_control.schemas.attendance import AttendanceCreate
from access_control.schemas.group import GroupCreate
from access_control.schemas.person import PersonCreate
from access_control.schemas.rule import RuleCreate
from access_control.schemas.schedule import GroupScheduleIn


class TestDefaultSchedules:
    """Tests for the generated full-week windows."""

    def test_access_schedules_cover_every_weekday(self) -> None:
        """Test seven windows, Monday to Sunday, spanning the whole day."""
        schedules = default_access_schedules()

        assert [s.day_of_week for s in schedules] == [1, 2, 3, 4, 5, 6, 7]
        for schedule in schedules:
            assert schedule.date is None
            assert schedule.start_time == time(0, 0, 0)
            assert schedule.end_time == time(23, 59, 59)

    def test_attendance_schedules_have_zero_grace(self) -> None:
        """Test every grace offset of the default attendance week is zero."""
        schedules = default_attendance_schedules()

        assert len(schedules) == 7
        for schedule in schedules:
            assert schedule.start_time == time(0, 0, 0)
            assert schedule.end_time == time(23, 59, 59)
            assert schedule.early_in_minutes == 0
            assert schedule.late_in_minutes == 0
            assert schedule.early_out_minutes == 0
            assert schedule.late_out_minutes == 0

    def test_defaults_are_fresh_objects(self) -> None:
        """Test each call builds new windows."""
        first = default_access_schedules()
        second = default_access_schedules()

        assert first[0] is not second[0]


class TestExpandDefaults:
    """Tests for the expand_* helpers."""

    def test_group_omitted_collections(self) -> None:
        """Test omitted schedules become the full week and devices become []."""
        expanded = expand_group_defaults(GroupCreate(name="Lobby"))

        assert expanded.device_ids == []
        assert len(expanded.schedules) == 7

    def test_group_empty_schedules_stay_empty(self) -> None:
        """Test an explicit empty list is not replaced by defaults."""
        expanded = expand_group_defaults(GroupCreate(name="Lobby", schedules=[]))

        assert expanded.schedules == []

    def test_group_given_schedules_kept(self) -> None:
        """Test provided windows pass through unchanged."""
        window = GroupScheduleIn(day_of_week=3)
        expanded = expand_group_defaults(GroupCreate(name="Lobby", schedules=[window]))

        assert expanded.schedules == [window]

    def test_group_original_not_mutated(self) -> None:
        """Test expansion returns a copy."""
        original = GroupCreate(name="Lobby")
        expand_group_defaults(original)

        assert original.schedules is None
        assert original.device_ids is None

    def test_rule_omitted_groups(self) -> None:
        """Test rules get no default groups."""
        assert expand_rule_defaults(RuleCreate(name="R1")).group_ids == []

    def test_attendance_omitted_schedules(self) -> None:
        """Test attendance gets the zero-grace full week."""
        expanded = expand_attendance_defaults(AttendanceCreate(name="Shift"))

        assert len(expanded.schedules) == 7

    def test_person_omitted_identifiers(self) -> None:
        """Test cards and plates default to empty lists."""
        expanded = expand_person_defaults(
            PersonCreate(first_name="Ada", last_name="Lovelace", person_type="employee")
        )

        assert expanded.card_numbers == []
        assert expanded.license_plate_texts == []
