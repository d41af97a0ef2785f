"""
Uniqueness Validation

Duplicate checks run as explicit queries before a write, so callers get a
DuplicateError naming the offending field instead of a database integrity
error. Only live rows count: a soft-deleted server frees its name.

    validator = UniquenessValidator(session, AccessControlRule, "name",
                                    resource=RESOURCE_RULE)
    await validator.ensure_unique("R1")                    # create
    await validator.ensure_unique("R1", exclude_id=rule.id)  # update

For child tables the excluded owner is the parent, not the row itself:

    cards = UniquenessValidator(session, PersonCard, "card_number",
                                resource=RESOURCE_PERSON,
                                owner_column="person_id")
    await cards.ensure_all_unique(card_numbers, exclude_id=person.id)
"""

from collections.abc import Iterable
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count

from access_control.core.exceptions import DuplicateError
from access_control.models.base import Base


class UniquenessValidator:
    """Checks one column of one model for values held by other live rows."""

    def __init__(
        self,
        session: AsyncSession,
        model: type[Base],
        field: str,
        *,
        resource: str,
        owner_column: str = "id",
    ) -> None:
        self.session = session
        self.model = model
        self.field = field
        self.resource = resource
        self.column = getattr(model, field)
        self.owner = getattr(model, owner_column)

    async def exists(self, value: Any, exclude_id: UUID | None = None) -> bool:
        """
        Check whether another live row already holds the value.

        Args:
            value: Candidate value
            exclude_id: Owner whose rows are ignored (the record being
                updated); None checks every live row

        SQL Generated:
            SELECT count(id) FROM <table>
            WHERE <field> = :value
              AND deleted_at IS NULL          -- soft-deletable models only
              AND <owner_column> != :exclude  -- when exclude_id is given
        """
        query = select(count(self.model.id)).where(self.column == value)
        if hasattr(self.model, "deleted_at"):
            query = query.where(self.model.deleted_at.is_(None))
        if exclude_id is not None:
            query = query.where(self.owner != exclude_id)

        result = await self.session.execute(query)
        return (result.scalar() or 0) > 0

    async def ensure_unique(self, value: Any, exclude_id: UUID | None = None) -> None:
        """Raise DuplicateError if another live row holds the value."""
        if value is None:
            return
        if await self.exists(value, exclude_id):
            raise DuplicateError(self.resource, self.field, value)

    async def ensure_all_unique(
        self,
        values: Iterable[Any],
        exclude_id: UUID | None = None,
    ) -> None:
        """ensure_unique for each value, stopping at the first duplicate."""
        for value in values:
            await self.ensure_unique(value, exclude_id)
