"""
Base Repository

Generic base repository with common CRUD operations.
All entity-specific repositories inherit from this class.

What This Provides:
===================
- get(id)           → Fetch single record by UUID (deleted or not)
- get_live(id)      → Fetch single record only if not soft-deleted
- get_live_by_ids() → Fetch multiple live records by UUIDs
- search()          → List live records with pagination and filters
- count_search()    → Count live records matching the same filters
- create()          → Create new record
- update()          → Update provided, non-None fields (merge)
- overwrite()       → Set every provided field, None included (replace)
- soft_delete()     → Set deleted_at

Generic Type Pattern:
=====================
    class GroupRepository(BaseRepository[AccessControlGroup]):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(AccessControlGroup, session)

    repo = GroupRepository(db)
    group = await repo.get_live(id)  # Returns AccessControlGroup, not Any

Live Records:
=============
A record is "live" when its deleted_at column is NULL. Models without a
deleted_at column (child association rows) are always live.

flush() vs commit():
====================
- flush(): Sends SQL to database but doesn't commit the transaction
- commit(): Done by the Transaction handle that wraps a service write
Repository methods only flush, so a parent write and its child rows
commit or roll back together.
"""

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count

from access_control.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session (the transaction's, inside writes)
    """

    # Columns matched with case-insensitive substring search in search()
    searchable_fields: tuple[str, ...] = ()

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    @property
    def soft_deletable(self) -> bool:
        """Whether the model carries a deleted_at column."""
        return hasattr(self.model, "deleted_at")

    def live_query(self) -> Select:
        """SELECT for records that are not soft-deleted."""
        query = select(self.model)
        if self.soft_deletable:
            query = query.where(self.model.deleted_at.is_(None))
        return query

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, entity_id: UUID) -> ModelType | None:
        """
        Get a single record by its UUID, regardless of soft-delete state.

        SQL Generated:
            SELECT * FROM <table> WHERE id = '550e8400-...'
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none()

    async def get_live(self, entity_id: UUID) -> ModelType | None:
        """
        Get a single live record by its UUID.

        Args:
            entity_id: The UUID of the record to fetch

        Returns:
            The model instance if found and not soft-deleted, None otherwise

        SQL Generated:
            SELECT * FROM <table> WHERE id = '...' AND deleted_at IS NULL
        """
        result = await self.session.execute(
            self.live_query().where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none()

    async def get_live_by_ids(self, ids: list[UUID]) -> list[ModelType]:
        """
        Get multiple live records by their UUIDs in a single IN query.

        Args:
            ids: List of UUIDs to fetch

        Returns:
            Matching live records (fewer than requested if some are missing),
            in no particular order

        SQL Generated:
            SELECT * FROM <table> WHERE id IN (...) AND deleted_at IS NULL
        """
        if not ids:
            return []

        result = await self.session.execute(
            self.live_query().where(self.model.id.in_(ids))
        )
        return list(result.scalars().all())

    def _apply_filters(
        self,
        query: Select,
        contains: dict[str, str | None] | None,
        equals: dict[str, Any] | None,
    ) -> Select:
        # Substring filters: WHERE lower(field) LIKE '%value%'
        for field, value in (contains or {}).items():
            if value and field in self.searchable_fields:
                query = query.where(getattr(self.model, field).ilike(f"%{value}%"))

        # Equality filters: WHERE field = value
        for field, value in (equals or {}).items():
            if value is not None and hasattr(self.model, field):
                query = query.where(getattr(self.model, field) == value)

        return query

    async def search(
        self,
        *,
        offset: int = 0,
        limit: int = 100,
        contains: dict[str, str | None] | None = None,
        equals: dict[str, Any] | None = None,
        order_by: str = "created_at",
        order_desc: bool = True,
    ) -> list[ModelType]:
        """
        List live records with pagination and optional filtering.

        Args:
            offset: Number of records to skip
            limit: Maximum records to return
            contains: field=value pairs matched as case-insensitive substrings
                (only fields listed in searchable_fields are honoured)
            equals: field=value pairs matched exactly (None values ignored)
            order_by: Field name to order results by
            order_desc: If True, order descending

        Example:
            devices = await repo.search(
                offset=0,
                limit=10,
                contains={"name": "lobby"},
                equals={"type": "face_scanner"},
            )

        SQL Generated:
            SELECT * FROM access_control_devices
            WHERE deleted_at IS NULL
              AND name ILIKE '%lobby%'
              AND type = 'face_scanner'
            ORDER BY created_at DESC
            OFFSET 0 LIMIT 10
        """
        query = self._apply_filters(self.live_query(), contains, equals)

        if hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            query = query.order_by(order_field.desc() if order_desc else order_field)

        query = query.offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_search(
        self,
        *,
        contains: dict[str, str | None] | None = None,
        equals: dict[str, Any] | None = None,
    ) -> int:
        """Count live records matching the same filters as search()."""
        query = select(count(self.model.id)).select_from(self.model)
        if self.soft_deletable:
            query = query.where(self.model.deleted_at.is_(None))
        query = self._apply_filters(query, contains, equals)

        result = await self.session.execute(query)
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Creates a new instance of the model, adds it to the session,
        and flushes to get the generated ID and defaults.

        SQL Generated:
            INSERT INTO <table> (...) VALUES (...)
        """
        instance = self.model(**kwargs)
        self.session.add(instance)

        # Flush: send INSERT (but don't commit yet)
        await self.session.flush()

        # Refresh: load server-side defaults (created_at, updated_at)
        await self.session.refresh(instance)

        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def update(
        self,
        entity_id: UUID,
        **kwargs: Any,
    ) -> ModelType | None:
        """
        Merge provided values into a live record.

        Only fields that are provided and not None are changed; use
        overwrite() when None must clear a column.

        Returns:
            Updated model instance, or None if not found

        SQL Generated:
            UPDATE <table> SET name = 'New Name', updated_at = NOW() WHERE id = '...'
        """
        instance = await self.get_live(entity_id)
        if not instance:
            return None

        for field, value in kwargs.items():
            if hasattr(instance, field) and value is not None:
                setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)

        return instance

    async def overwrite(
        self,
        entity_id: UUID,
        **kwargs: Any,
    ) -> ModelType | None:
        """
        Replace fields of a live record with the provided values.

        Unlike update(), None is written as NULL. Fields not passed keep
        their current value.

        Returns:
            Updated model instance, or None if not found
        """
        instance = await self.get_live(entity_id)
        if not instance:
            return None

        for field, value in kwargs.items():
            if hasattr(instance, field):
                setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)

        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def soft_delete(self, entity_id: UUID) -> ModelType | None:
        """
        Soft delete a live record by setting its deleted_at timestamp.

        The record remains in the table but drops out of every live query
        and uniqueness check.

        Returns:
            Updated model instance, or None if not found or already deleted

        SQL Generated:
            UPDATE <table> SET deleted_at = NOW() WHERE id = '...'
        """
        instance = await self.get_live(entity_id)

        if not instance or not self.soft_deletable:
            return None

        instance.deleted_at = datetime.now(UTC)

        await self.session.flush()
        await self.session.refresh(instance)

        return instance
