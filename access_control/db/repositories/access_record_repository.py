"""
Access Record Repository

Data access for access records. Besides the equality filters of
BaseRepository, records can be narrowed to an access_time window:

    SELECT * FROM access_records
    WHERE person_id = '...'
      AND access_time >= '2024-03-01T00:00:00Z'
      AND access_time <  '2024-04-01T00:00:00Z'
    ORDER BY access_time DESC
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count

from access_control.db.repositories.base import BaseRepository
from access_control.models.access_record import AccessRecord


class AccessRecordRepository(BaseRepository[AccessRecord]):
    """Repository for AccessRecord operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(AccessRecord, session)

    @staticmethod
    def _within(
        query: Select,
        since: Optional[datetime],
        until: Optional[datetime],
    ) -> Select:
        if since is not None:
            query = query.where(AccessRecord.access_time >= since)
        if until is not None:
            query = query.where(AccessRecord.access_time < until)
        return query

    async def search_records(
        self,
        *,
        offset: int = 0,
        limit: int = 100,
        equals: dict[str, Any] | None = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> list[AccessRecord]:
        """List records newest first, filtered by exact values and time window."""
        query = self._apply_filters(self.live_query(), None, equals)
        query = self._within(query, since, until)
        query = query.order_by(AccessRecord.access_time.desc()).offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_records(
        self,
        *,
        equals: dict[str, Any] | None = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> int:
        """Count records matching the same filters as search_records()."""
        query = select(count(AccessRecord.id)).select_from(AccessRecord)
        query = self._apply_filters(query, None, equals)
        query = self._within(query, since, until)

        result = await self.session.execute(query)
        return result.scalar() or 0
