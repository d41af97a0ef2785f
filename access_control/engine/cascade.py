"""
Cascade Deletion

Parents are hard deleted together with every child row they own:

    DELETE FROM <child_table_1> WHERE <parent_key> = :id
    DELETE FROM <child_table_2> WHERE <parent_key> = :id
    DELETE FROM <parent_table>  WHERE id = :id

All statements run in the caller's transaction, so either everything goes
or nothing does. Rows in other tables that merely reference the parent
(a person's rule, a rule's group link) are left alone; read views skip
references that no longer resolve.
"""

from collections.abc import Sequence
from uuid import UUID

from access_control.core.exceptions import NotFoundError
from access_control.core.logging import logger
from access_control.db.repositories.base import BaseRepository
from access_control.db.transaction import Transaction
from access_control.engine.replacer import AssociationReplacer
from access_control.models.base import Base


class CascadeDeleter:
    """Deletes one parent type and its child collections."""

    def __init__(
        self,
        parent_model: type[Base],
        resource: str,
        children: Sequence[AssociationReplacer],
    ) -> None:
        self.parent_model = parent_model
        self.resource = resource
        self.children = tuple(children)

    async def delete(self, tx: Transaction, parent_id: UUID) -> None:
        """
        Delete the parent and all of its child rows.

        Raises:
            NotFoundError: The parent is missing or soft deleted
        """
        parent = await BaseRepository(self.parent_model, tx.session).get_live(parent_id)
        if parent is None:
            raise NotFoundError(resource=self.resource, resource_id=str(parent_id))

        for child in self.children:
            removed = await child.repository(tx.session).delete_by_parent(parent_id)
            logger.debug(
                "Deleted child rows",
                table=child.model.__tablename__,
                parent_id=str(parent_id),
                removed=removed,
            )

        await tx.session.delete(parent)
        await tx.session.flush()
