"""Attendance Repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.db.repositories.base import BaseRepository
from access_control.models.attendance import Attendance


class AttendanceRepository(BaseRepository[Attendance]):
    """Repository for Attendance operations."""

    searchable_fields = ("name",)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Attendance, session)
