"""Initial schema: servers, devices, groups, rules, attendances, people, users

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

Parent and child tables are linked by plain UUID columns; references are
validated by the application, not by foreign keys. Identity columns are
unique among live rows through partial indexes.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LIVE = sa.text("deleted_at IS NULL")


def _id() -> sa.Column:
    return sa.Column("id", sa.Uuid(), primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _deleted_at() -> sa.Column:
    return sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True)


def _live_unique(name: str, table: str, column: str) -> None:
    op.create_index(
        name,
        table,
        [column],
        unique=True,
        postgresql_where=LIVE,
        sqlite_where=LIVE,
    )


def _credentials() -> list[sa.Column]:
    return [
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("password", sa.String(255), nullable=True),
        sa.Column("access_token", sa.String(1024), nullable=True),
        sa.Column("api_token", sa.String(1024), nullable=True),
    ]


def _schedule_columns() -> list[sa.Column]:
    return [
        sa.Column("day_of_week", sa.Integer(), nullable=True),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
    ]


def upgrade() -> None:
    # Servers and devices
    op.create_table(
        "access_control_servers",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("host_address", sa.String(255), nullable=False),
        *_credentials(),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("last_sync_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        _deleted_at(),
    )
    _live_unique("uq_access_control_servers_name", "access_control_servers", "name")
    _live_unique(
        "uq_access_control_servers_host_address",
        "access_control_servers",
        "host_address",
    )

    op.create_table(
        "access_control_devices",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(100), nullable=False),
        sa.Column("host_address", sa.String(255), nullable=False),
        *_credentials(),
        sa.Column("access_control_server_id", sa.Uuid(), nullable=True),
        sa.Column("record_scan", sa.Boolean(), nullable=False),
        sa.Column("record_attendance", sa.Boolean(), nullable=False),
        sa.Column("allow_clock_in", sa.Boolean(), nullable=False),
        sa.Column("allow_clock_out", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(),
        _deleted_at(),
    )
    op.create_index(
        "ix_access_control_devices_access_control_server_id",
        "access_control_devices",
        ["access_control_server_id"],
    )
    _live_unique("uq_access_control_devices_name", "access_control_devices", "name")
    _live_unique(
        "uq_access_control_devices_host_address",
        "access_control_devices",
        "host_address",
    )

    # Groups
    op.create_table(
        "access_control_groups",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
        _deleted_at(),
    )
    _live_unique("uq_access_control_groups_name", "access_control_groups", "name")

    op.create_table(
        "access_control_group_devices",
        _id(),
        sa.Column("access_control_group_id", sa.Uuid(), nullable=False),
        sa.Column("access_control_device_id", sa.Uuid(), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "ix_access_control_group_devices_access_control_group_id",
        "access_control_group_devices",
        ["access_control_group_id"],
    )

    op.create_table(
        "access_control_group_schedules",
        _id(),
        sa.Column("access_control_group_id", sa.Uuid(), nullable=False),
        *_schedule_columns(),
        *_timestamps(),
    )
    op.create_index(
        "ix_access_control_group_schedules_access_control_group_id",
        "access_control_group_schedules",
        ["access_control_group_id"],
    )

    # Rules
    op.create_table(
        "access_control_rules",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
        _deleted_at(),
    )
    _live_unique("uq_access_control_rules_name", "access_control_rules", "name")

    op.create_table(
        "access_control_rule_groups",
        _id(),
        sa.Column("access_control_rule_id", sa.Uuid(), nullable=False),
        sa.Column("access_control_group_id", sa.Uuid(), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "ix_access_control_rule_groups_access_control_rule_id",
        "access_control_rule_groups",
        ["access_control_rule_id"],
    )

    # Attendances
    op.create_table(
        "attendances",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
        _deleted_at(),
    )
    _live_unique("uq_attendances_name", "attendances", "name")

    op.create_table(
        "attendance_schedules",
        _id(),
        sa.Column("attendance_id", sa.Uuid(), nullable=False),
        *_schedule_columns(),
        sa.Column("early_in_minutes", sa.Integer(), nullable=False),
        sa.Column("late_in_minutes", sa.Integer(), nullable=False),
        sa.Column("early_out_minutes", sa.Integer(), nullable=False),
        sa.Column("late_out_minutes", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "ix_attendance_schedules_attendance_id",
        "attendance_schedules",
        ["attendance_id"],
    )

    # People
    op.create_table(
        "people",
        _id(),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("middle_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("person_type", sa.String(20), nullable=False),
        sa.Column("person_id", sa.String(100), nullable=True),
        sa.Column("gender", sa.String(20), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("department", sa.String(255), nullable=True),
        sa.Column("job_position", sa.String(255), nullable=True),
        sa.Column("address", sa.String(1024), nullable=True),
        sa.Column("mobile_number", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("face_image_path", sa.String(512), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("active_at", sa.Date(), nullable=True),
        sa.Column("expire_at", sa.Date(), nullable=True),
        sa.Column("access_control_rule_id", sa.Uuid(), nullable=True),
        sa.Column("time_attendance_id", sa.Uuid(), nullable=True),
        *_timestamps(),
        _deleted_at(),
    )
    person_id_live = sa.text("person_id IS NOT NULL AND deleted_at IS NULL")
    op.create_index(
        "uq_people_person_id",
        "people",
        ["person_id"],
        unique=True,
        postgresql_where=person_id_live,
        sqlite_where=person_id_live,
    )
    op.create_index("ix_people_last_first", "people", ["last_name", "first_name"])
    op.create_index(
        "ix_people_access_control_rule_id", "people", ["access_control_rule_id"]
    )
    op.create_index("ix_people_time_attendance_id", "people", ["time_attendance_id"])

    op.create_table(
        "person_cards",
        _id(),
        sa.Column("person_id", sa.Uuid(), nullable=False),
        sa.Column("card_number", sa.String(100), nullable=False, unique=True),
        sa.Column("active_at", sa.Date(), nullable=True),
        sa.Column("expire_at", sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_person_cards_person_id", "person_cards", ["person_id"])

    op.create_table(
        "person_license_plates",
        _id(),
        sa.Column("person_id", sa.Uuid(), nullable=False),
        sa.Column("license_plate_text", sa.String(50), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_person_license_plates_person_id", "person_license_plates", ["person_id"]
    )

    # Users
    op.create_table(
        "users",
        _id(),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(),
        _deleted_at(),
    )
    _live_unique("uq_users_username", "users", "username")

    op.create_table(
        "user_permissions",
        _id(),
        sa.Column("user_id", sa.Uuid(), nullable=False, unique=True),
        sa.Column("people_permission", sa.Boolean(), nullable=False),
        sa.Column("device_permission", sa.Boolean(), nullable=False),
        sa.Column("rule_permission", sa.Boolean(), nullable=False),
        sa.Column("time_attendance_permission", sa.Boolean(), nullable=False),
        sa.Column("report_permission", sa.Boolean(), nullable=False),
        sa.Column("notification_permission", sa.Boolean(), nullable=False),
        sa.Column("system_log_permission", sa.Boolean(), nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    for table in (
        "user_permissions",
        "users",
        "person_license_plates",
        "person_cards",
        "people",
        "attendance_schedules",
        "attendances",
        "access_control_rule_groups",
        "access_control_rules",
        "access_control_group_schedules",
        "access_control_group_devices",
        "access_control_groups",
        "access_control_devices",
        "access_control_servers",
    ):
        op.drop_table(table)
