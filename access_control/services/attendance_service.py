"""
Attendance Service

Business logic for attendance definitions and their working windows:

    Attendance
        └── AttendanceSchedule (window + early/late in/out grace minutes)
"""

from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.config.constants import RESOURCE_ATTENDANCE
from access_control.core.exceptions import NotFoundError
from access_control.core.logging import logger
from access_control.db.repositories import AttendanceRepository
from access_control.db.transaction import Transaction
from access_control.engine import (
    AssociationReplacer,
    CascadeDeleter,
    UniquenessValidator,
    expand_attendance_defaults,
)
from access_control.models.attendance import Attendance, AttendanceSchedule
from access_control.schemas.attendance import (
    AttendanceCreate,
    AttendancePatch,
    AttendanceResponse,
    AttendanceUpdate,
)
from access_control.schemas.schedule import AttendanceScheduleResponse

ATTENDANCE_SCHEDULES = AssociationReplacer(
    AttendanceSchedule,
    "attendance_id",
    order_by=("day_of_week", "date", "start_time"),
)


class AttendanceService:
    """Service for attendance definition operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = AttendanceRepository(session)
        self.names = UniquenessValidator(
            session, Attendance, "name", resource=RESOURCE_ATTENDANCE
        )
        self.deleter = CascadeDeleter(
            Attendance, RESOURCE_ATTENDANCE, (ATTENDANCE_SCHEDULES,)
        )

    async def create_attendance(self, data: AttendanceCreate) -> AttendanceResponse:
        """Create an attendance definition.

        Omitted schedules expand to seven full-day windows with zero grace.

        Raises:
            DuplicateError: Name already used by a live definition
        """
        data = expand_attendance_defaults(data)

        async with Transaction(self.session) as tx:
            await self.names.ensure_unique(data.name)
            attendance = await tx.repository(AttendanceRepository).create(name=data.name)
            await ATTENDANCE_SCHEDULES.replace(
                tx, attendance.id, [s.to_row() for s in data.schedules]
            )

        logger.info(
            "Attendance created",
            attendance_id=str(attendance.id),
            schedule_count=len(data.schedules),
        )
        return await self._to_response(attendance)

    async def get_attendance(self, attendance_id: UUID) -> AttendanceResponse:
        attendance = await self.repo.get_live(attendance_id)
        if not attendance:
            raise NotFoundError(
                resource=RESOURCE_ATTENDANCE, resource_id=str(attendance_id)
            )
        return await self._to_response(attendance)

    async def list_attendances(
        self,
        offset: int = 0,
        limit: int = 100,
        name: Optional[str] = None,
    ) -> Tuple[list[AttendanceResponse], int]:
        contains = {"name": name}
        items = await self.repo.search(offset=offset, limit=limit, contains=contains)
        total = await self.repo.count_search(contains=contains)
        return [await self._to_response(a) for a in items], total

    async def update_attendance(
        self, attendance_id: UUID, data: AttendanceUpdate
    ) -> AttendanceResponse:
        """Replace the name and the whole schedule set."""
        data = expand_attendance_defaults(data)

        async with Transaction(self.session) as tx:
            attendances = tx.repository(AttendanceRepository)
            if not await attendances.get_live(attendance_id):
                raise NotFoundError(
                    resource=RESOURCE_ATTENDANCE, resource_id=str(attendance_id)
                )

            await self.names.ensure_unique(data.name, exclude_id=attendance_id)
            attendance = await attendances.overwrite(attendance_id, name=data.name)
            await ATTENDANCE_SCHEDULES.replace(
                tx, attendance_id, [s.to_row() for s in data.schedules]
            )

        logger.info("Attendance updated", attendance_id=str(attendance_id))
        return await self._to_response(attendance)

    async def partial_update_attendance(
        self, attendance_id: UUID, data: AttendancePatch
    ) -> AttendanceResponse:
        async with Transaction(self.session) as tx:
            attendances = tx.repository(AttendanceRepository)
            if not await attendances.get_live(attendance_id):
                raise NotFoundError(
                    resource=RESOURCE_ATTENDANCE, resource_id=str(attendance_id)
                )

            if data.name is not None:
                await self.names.ensure_unique(data.name, exclude_id=attendance_id)
            attendance = await attendances.update(attendance_id, name=data.name)

            if data.schedules is not None:
                await ATTENDANCE_SCHEDULES.replace(
                    tx, attendance_id, [s.to_row() for s in data.schedules]
                )

        logger.info("Attendance patched", attendance_id=str(attendance_id))
        return await self._to_response(attendance)

    async def delete_attendance(self, attendance_id: UUID) -> None:
        async with Transaction(self.session) as tx:
            await self.deleter.delete(tx, attendance_id)

        logger.info("Attendance deleted", attendance_id=str(attendance_id))

    async def _to_response(self, attendance: Attendance) -> AttendanceResponse:
        schedules = await ATTENDANCE_SCHEDULES.list_for(self.session, attendance.id)
        return AttendanceResponse(
            id=str(attendance.id),
            name=attendance.name,
            schedules=[
                AttendanceScheduleResponse(
                    id=str(s.id),
                    day_of_week=s.day_of_week,
                    date=s.date,
                    start_time=s.start_time,
                    end_time=s.end_time,
                    early_in_minutes=s.early_in_minutes,
                    late_in_minutes=s.late_in_minutes,
                    early_out_minutes=s.early_out_minutes,
                    late_out_minutes=s.late_out_minutes,
                )
                for s in schedules
            ],
            created_at=attendance.created_at,
            updated_at=attendance.updated_at,
        )
