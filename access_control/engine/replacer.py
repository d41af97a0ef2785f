"""
Association Replacer

Keeps a parent's child collection equal to the set in the request. Every
replacement is delete-all-then-insert inside the caller's transaction:

    1. check referenced targets are live (when a ReferenceResolver is set)
    2. DELETE FROM <child_table> WHERE <parent_key> = :parent_id
    3. INSERT the new rows tagged with parent_id

Step 1 runs before any row is touched, so a bad reference leaves the old
children in place. Deleting first means a value the parent already owned
(a card number kept across an update) never collides with itself.

    GROUP_DEVICES = AssociationReplacer(
        AccessControlGroupDevice,
        "access_control_group_id",
        reference=ReferenceResolver(
            AccessControlDevice, RESOURCE_DEVICE, key="access_control_device_id"
        ),
    )

    async with Transaction(session) as tx:
        await GROUP_DEVICES.replace(
            tx, group.id, [{"access_control_device_id": d} for d in device_ids]
        )
"""

from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.core.logging import logger
from access_control.db.repositories.association_repository import AssociationRepository
from access_control.db.transaction import Transaction
from access_control.engine.references import ReferenceResolver
from access_control.models.base import Base


class AssociationReplacer:
    """Replaces the rows of one child table for one parent at a time."""

    def __init__(
        self,
        model: type[Base],
        parent_key: str,
        *,
        reference: ReferenceResolver | None = None,
        order_by: Sequence[str] = ("created_at", "id"),
    ) -> None:
        self.model = model
        self.parent_key = parent_key
        self.reference = reference
        self.order_by = tuple(order_by)

    def repository(self, session: AsyncSession) -> AssociationRepository:
        """Repository for this child table bound to a session."""
        return AssociationRepository(
            self.model, self.parent_key, session, order_by=self.order_by
        )

    async def replace(
        self,
        tx: Transaction,
        parent_id: UUID,
        specs: Sequence[Mapping[str, Any]],
    ) -> list[Any]:
        """
        Make the parent's child rows exactly the given specs.

        Args:
            tx: Open transaction shared with the parent write
            parent_id: Owning parent
            specs: Column values of each new row, without the parent column

        Returns:
            The inserted rows

        Raises:
            NotFoundError: A referenced target is missing or soft deleted
        """
        if self.reference is not None:
            await self.reference.ensure_exists(
                tx.session, [spec[self.reference.key] for spec in specs]
            )

        repo = self.repository(tx.session)
        removed = await repo.delete_by_parent(parent_id)
        rows = await repo.add_many(parent_id, specs)

        logger.debug(
            "Replaced child rows",
            table=self.model.__tablename__,
            parent_id=str(parent_id),
            removed=removed,
            inserted=len(rows),
        )
        return rows

    async def list_for(self, session: AsyncSession, parent_id: UUID) -> list[Any]:
        """Current child rows of one parent."""
        return await self.repository(session).list_by_parent(parent_id)
