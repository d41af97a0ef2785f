#!/usr/bin/env python3
"""
Database Seeder

Creates initial data for development and testing.
Cleans existing seed data before inserting fresh data.

Run from project root after migrating (alembic upgrade head):
    python -m scripts.seed_db
"""

import asyncio
from datetime import UTC, datetime

from sqlalchemy import text

from access_control.config.constants import (
    AccessRecordResult,
    AccessRecordType,
    PersonType,
)
from access_control.core.logging import logger
from access_control.db.session import AsyncSessionLocal, init_db
from access_control.schemas.access_record import AccessRecordCreate
from access_control.schemas.attendance import AttendanceCreate
from access_control.schemas.device import DeviceCreate
from access_control.schemas.group import GroupCreate
from access_control.schemas.person import PersonCreate
from access_control.schemas.rule import RuleCreate
from access_control.schemas.schedule import AttendanceScheduleIn, GroupScheduleIn
from access_control.schemas.server import ServerCreate
from access_control.schemas.user import PermissionIn, UserCreate
from access_control.services import (
    AccessRecordService,
    AttendanceService,
    DeviceService,
    GroupService,
    PersonService,
    RuleService,
    ServerService,
    UserService,
)


async def clean_seed_data(session) -> None:
    """Remove existing seed data before reseeding."""
    logger.info("Cleaning existing seed data...")

    # Children first, then their parents
    tables = [
        "access_records",
        "person_cards",
        "person_license_plates",
        "people",
        "access_control_rule_groups",
        "access_control_rules",
        "access_control_group_devices",
        "access_control_group_schedules",
        "access_control_groups",
        "attendance_schedules",
        "attendances",
        "access_control_devices",
        "access_control_servers",
        "user_permissions",
        "users",
    ]

    for table in tables:
        await session.execute(text(f"DELETE FROM {table}"))
        logger.info("Cleared table", table=table)

    await session.commit()
    logger.info("Seed data cleaned successfully")


async def seed_database() -> None:
    """Seed the database with initial data."""
    logger.info("Starting database seeding...")

    await init_db()

    async with AsyncSessionLocal() as session:
        await clean_seed_data(session)

        # Dashboard users
        admin = await UserService(session).create_user(
            UserCreate(
                username="admin",
                password="admin12345",
                permission=PermissionIn(**{f: True for f in PermissionIn.model_fields}),
            )
        )
        logger.info("Created user", username=admin.username)

        receptionist = await UserService(session).create_user(
            UserCreate(
                username="receptionist",
                password="frontdesk123",
                permission=PermissionIn(people_permission=True),
            )
        )
        logger.info("Created user", username=receptionist.username)

        # Hardware
        server = await ServerService(session).create_server(
            ServerCreate(name="HQ Controller", host_address="192.168.10.2")
        )
        logger.info("Created server", name=server.name)

        devices = []
        for index, name in enumerate(("Main Entrance", "Parking Gate"), start=1):
            device = await DeviceService(session).create_device(
                DeviceCreate(
                    name=name,
                    type="face_scanner",
                    host_address=f"192.168.10.{10 + index}",
                    access_control_server_id=server.id,
                    record_scan=True,
                    record_attendance=index == 1,
                    allow_clock_in=index == 1,
                    allow_clock_out=index == 1,
                )
            )
            devices.append(device)
            logger.info("Created device", name=device.name)

        # Groups and rules
        all_day = await GroupService(session).create_group(
            GroupCreate(name="All Areas", device_ids=[d.id for d in devices])
        )
        office_hours = await GroupService(session).create_group(
            GroupCreate(
                name="Entrance Office Hours",
                device_ids=[devices[0].id],
                schedules=[
                    GroupScheduleIn(
                        day_of_week=day, start_time="07:00:00", end_time="19:00:00"
                    )
                    for day in range(1, 6)
                ],
            )
        )
        logger.info("Created groups", groups=[all_day.name, office_hours.name])

        staff_rule = await RuleService(session).create_rule(
            RuleCreate(name="Staff", group_ids=[all_day.id])
        )
        visitor_rule = await RuleService(session).create_rule(
            RuleCreate(name="Visitors", group_ids=[office_hours.id])
        )
        logger.info("Created rules", rules=[staff_rule.name, visitor_rule.name])

        shift = await AttendanceService(session).create_attendance(
            AttendanceCreate(
                name="Day Shift",
                schedules=[
                    AttendanceScheduleIn(day_of_week=day, late_in_minutes=15)
                    for day in range(1, 6)
                ],
            )
        )
        logger.info("Created attendance", name=shift.name)

        # People
        people = PersonService(session)
        employee = await people.create_person(
            PersonCreate(
                first_name="Jane",
                last_name="Doe",
                person_type=PersonType.EMPLOYEE,
                person_id="EMP-0001",
                department="Operations",
                card_numbers=["0001234567"],
                license_plate_texts=["B 1234 XYZ"],
                access_control_rule_id=staff_rule.id,
                time_attendance_id=shift.id,
            )
        )
        visitor = await people.create_person(
            PersonCreate(
                first_name="John",
                last_name="Smith",
                person_type=PersonType.VISITOR,
                company="Acme Supplies",
                access_control_rule_id=visitor_rule.id,
            )
        )
        logger.info("Created people", people=[employee.id, visitor.id])

        # Access log
        record = await AccessRecordService(session).create_access_record(
            AccessRecordCreate(
                person_id=employee.id,
                access_control_device_id=devices[0].id,
                type=AccessRecordType.IN,
                result=AccessRecordResult.SUCCESS,
                access_time=datetime(2026, 1, 5, 8, 2, 11, tzinfo=UTC),
            )
        )
        logger.info("Created access record", access_record_id=record.id)

    logger.info("Database seeding completed!")


if __name__ == "__main__":
    asyncio.run(seed_database())
