"""
Base Model Classes

Foundational classes for all SQLAlchemy models: the declarative base and
mixins for identifiers, timestamps, soft deletion and enum validation.

Parent entities (groups, rules, attendances, people, users) and leaf entities
(servers, devices) use SoftDeleteMixin. Child association rows do not: they are
always removed with a hard DELETE when their parent rewrites or drops them.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from sqlalchemy import DateTime, event
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql.functions import now


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models in the application inherit from this class either
    directly or through one of the mixin classes.
    """


class UUIDPrimaryKeyMixin:
    """Mixin that adds a client-generated UUID primary key."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        doc="Unique identifier",
    )


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    Example values:
        created_at: 2024-01-15T10:30:00Z (when record was created)
        updated_at: 2024-01-16T14:45:30Z (last modification time)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=now(),         # Database sets this on INSERT
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=now(),         # Initial value on INSERT
        onupdate=now(),               # SQLAlchemy updates this on UPDATE
        nullable=False,
    )


class SoftDeleteMixin:
    """
    Mixin that adds soft delete capability to models.

    Example values:
        deleted_at: None              (record is live)
        deleted_at: 2024-01-20T09:00:00Z  (record was soft-deleted)

    Note: "live" queries must filter out soft-deleted records:
        query.where(MyModel.deleted_at.is_(None))
    """

    # NULL means the record is live; a timestamp means it's deleted
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    @property
    def is_deleted(self) -> bool:
        """
        Check if the record has been soft deleted.

        Returns:
            True if deleted_at is set (record is deleted)
            False if deleted_at is None (record is live)
        """
        return self.deleted_at is not None


class EnumValidationMixin:
    """
    Mixin that provides automatic enum validation for model fields.

    Models using this mixin define an `_enum_fields` class variable
    that maps field names to their corresponding Enum classes.

    Example:
        class Person(Base, EnumValidationMixin):
            _enum_fields: ClassVar[dict[str, type[Enum]]] = {
                "person_type": PersonType,
            }

    The validation runs before insert/update, so invalid enum values can
    never be written to the database.
    """

    _enum_fields: ClassVar[dict[str, type[Enum]]] = {}

    def validate_enum_fields(self) -> None:
        """
        Validate all enum fields have valid values.

        Raises:
            ValueError: If any enum field has an invalid value
        """
        for field_name, enum_class in self._enum_fields.items():
            value = getattr(self, field_name, None)
            if value is not None:
                valid_values = {e.value for e in enum_class}
                if value not in valid_values:
                    raise ValueError(
                        f"Invalid value '{value}' for field '{field_name}'. "
                        f"Must be one of: {', '.join(sorted(valid_values))}"
                    )

    @classmethod
    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Register validation event listeners when subclass is created."""
        super().__init_subclass__(**kwargs)

        if cls._enum_fields:
            # Signature: (mapper, connection, target) - we only need target
            @event.listens_for(cls, "before_insert", propagate=True)
            def validate_before_insert(*args: Any) -> None:
                target = args[2]
                target.validate_enum_fields()

            @event.listens_for(cls, "before_update", propagate=True)
            def validate_before_update(*args: Any) -> None:
                target = args[2]
                target.validate_enum_fields()
