"""
Response Assembly

Read views show referenced records (a group's devices, a rule's groups, a
person's rule) by resolving stored ids. Targets may have been deleted since
the reference was written; those are skipped rather than failing the read.
"""

from collections.abc import Iterable
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.core.logging import logger
from access_control.db.repositories.base import BaseRepository
from access_control.models.base import Base


class ResponseAssembler:
    """Resolves stored references to live rows for response building."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def resolve(self, model: type[Base], ids: Iterable[UUID]) -> list[Any]:
        """
        Live rows for the given ids, in the given order.

        Ids that do not resolve to a live row are dropped.
        """
        wanted = list(ids)
        if not wanted:
            return []

        rows = await BaseRepository(model, self.session).get_live_by_ids(wanted)
        by_id = {row.id: row for row in rows}

        resolved = []
        for entity_id in wanted:
            row = by_id.get(entity_id)
            if row is None:
                logger.debug(
                    "Skipping unresolved reference",
                    table=model.__tablename__,
                    reference_id=str(entity_id),
                )
                continue
            resolved.append(row)
        return resolved

    async def resolve_one(self, model: type[Base], entity_id: UUID | None) -> Any | None:
        """Single-reference variant of resolve(); None when absent or dangling."""
        if entity_id is None:
            return None
        rows = await self.resolve(model, [entity_id])
        return rows[0] if rows else None
