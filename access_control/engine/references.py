"""
Reference Resolution

Turns identifier strings from request bodies into UUIDs and checks that the
records they point at are live.

    ids = parse_identifiers(data.device_ids, field="device_ids")
    await ReferenceResolver(AccessControlDevice, RESOURCE_DEVICE).ensure_exists(
        session, ids
    )

Format problems are ValidationErrors and are raised before any query runs.
Missing or soft-deleted targets are NotFoundErrors naming the first
offending id in request order.
"""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.core.exceptions import NotFoundError, ValidationError
from access_control.core.utils import unique_in_order
from access_control.db.repositories.base import BaseRepository
from access_control.models.base import Base


def parse_identifier(value: str, field: str) -> UUID:
    """Parse one identifier, raising ValidationError on a malformed value."""
    try:
        return UUID(str(value))
    except ValueError as e:
        raise ValidationError(
            message=f"Invalid identifier '{value}'",
            field=field,
        ) from e


def parse_identifiers(values: Iterable[str] | None, field: str) -> list[UUID]:
    """
    Parse a list of identifiers.

    Repeated ids collapse to their first occurrence, so a request that lists
    the same device twice stores a single membership.

    Args:
        values: Raw identifier strings (None is treated as an empty list)
        field: Request field name, reported in validation errors

    Returns:
        Parsed UUIDs in request order without duplicates
    """
    if not values:
        return []
    return unique_in_order(parse_identifier(value, field) for value in values)


class ReferenceResolver:
    """Checks that referenced records of one model are live."""

    def __init__(
        self,
        model: type[Base],
        resource: str,
        key: str | None = None,
        field: str | None = None,
    ) -> None:
        """
        Args:
            model: Referenced model (e.g. AccessControlDevice)
            resource: Human-readable name used in NotFoundError
            key: Column of a child spec that holds the reference; used when
                the resolver is attached to an AssociationReplacer
            field: Request field name reported in error details
        """
        self.model = model
        self.resource = resource
        self.key = key
        self.field = field or key

    async def ensure_exists(self, session: AsyncSession, ids: Iterable[UUID]) -> None:
        """Raise NotFoundError for the first id that is not a live record."""
        wanted = unique_in_order(ids)
        if not wanted:
            return

        repo = BaseRepository(self.model, session)
        found = {row.id for row in await repo.get_live_by_ids(wanted)}

        for entity_id in wanted:
            if entity_id not in found:
                raise NotFoundError(
                    resource=self.resource,
                    resource_id=str(entity_id),
                    details={"field": self.field} if self.field else None,
                )

    async def ensure_one(self, session: AsyncSession, entity_id: UUID | None) -> None:
        """Same check for an optional single reference."""
        if entity_id is not None:
            await self.ensure_exists(session, [entity_id])
