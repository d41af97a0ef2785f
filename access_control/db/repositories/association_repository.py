"""
Association Repository

Data access for child association rows (group devices, schedules, rule
groups, cards, plates, permissions). Every child table has one column that
holds its parent's id; this repository reads and rewrites rows by that column.

Child rows carry no soft-delete marker, so every delete here is a hard
DELETE.
"""

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from access_control.db.repositories.base import BaseRepository
from access_control.models.base import Base

ChildType = TypeVar("ChildType", bound=Base)


class AssociationRepository(BaseRepository[ChildType]):
    """
    Repository for a child table keyed by its parent column.

    Example:
        links = AssociationRepository(
            AccessControlGroupDevice, "access_control_group_id", session
        )
        rows = await links.list_by_parent(group_id)
    """

    def __init__(
        self,
        model: type[ChildType],
        parent_key: str,
        session: AsyncSession,
        order_by: Sequence[str] = ("created_at", "id"),
    ) -> None:
        super().__init__(model, session)
        self.parent_key = parent_key
        self.parent_column = getattr(model, parent_key)
        self.order_by = tuple(getattr(model, field) for field in order_by)

    async def list_by_parent(self, parent_id: UUID) -> list[ChildType]:
        """
        Get all child rows of one parent in the configured order.

        SQL Generated:
            SELECT * FROM <child_table> WHERE <parent_key> = '...'
            ORDER BY <order_by...>
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.parent_column == parent_id)
            .order_by(*self.order_by)
        )
        return list(result.scalars().all())

    async def delete_by_parent(self, parent_id: UUID) -> int:
        """
        Hard delete every child row of one parent.

        Returns:
            Number of rows removed

        SQL Generated:
            DELETE FROM <child_table> WHERE <parent_key> = '...'
        """
        result = await self.session.execute(
            delete(self.model).where(self.parent_column == parent_id)
        )
        return result.rowcount or 0

    async def add_many(
        self,
        parent_id: UUID,
        specs: Sequence[Mapping[str, Any]],
    ) -> list[ChildType]:
        """
        Insert child rows tagged with the parent id.

        Args:
            parent_id: Owning parent
            specs: Column values for each row (without the parent column)

        Returns:
            The inserted rows; an empty list when specs is empty
        """
        if not specs:
            return []

        rows = [self.model(**{**spec, self.parent_key: parent_id}) for spec in specs]
        self.session.add_all(rows)
        await self.session.flush()
        return rows
