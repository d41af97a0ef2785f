"""
Access Record Model

One passage reported by a device: who went through, where, in which
direction and whether it was allowed. Records are an append-mostly log;
they are hard deleted and carry no soft delete column.

Person and device are plain references checked on write. Deleting either
later leaves the record pointing at nothing, and the read view shows null.

SAMPLE ACCESS RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                        │ bb0e8400-e29b-41d4-a716-446655440007             │
│ person_id                 │ 880e8400-e29b-41d4-a716-446655440003             │
│ access_control_device_id  │ 660e8400-e29b-41d4-a716-446655440001             │
│ type                      │ "in"                                             │
│ result                    │ "success"                                        │
│ access_time               │ 2024-03-04T08:02:11Z                             │
└──────────────────────────────────────────────────────────────────────────────┘
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import ClassVar

from sqlalchemy import DateTime, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from access_control.config.constants import AccessRecordResult, AccessRecordType
from access_control.models.base import (
    Base,
    EnumValidationMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class AccessRecord(Base, UUIDPrimaryKeyMixin, TimestampMixin, EnumValidationMixin):
    """
    Access record.

    Attributes:
        person_id: Person who passed, if identified
        access_control_device_id: Device that reported the passage
        type: in or out
        result: success, failed or unknown
        access_time: When the passage happened
    """

    __tablename__ = "access_records"

    _enum_fields: ClassVar[dict[str, type[Enum]]] = {
        "type": AccessRecordType,
        "result": AccessRecordResult,
    }

    person_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        nullable=True,
        index=True,
    )
    access_control_device_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        nullable=True,
        index=True,
    )

    type: Mapped[str] = mapped_column(String(10), nullable=False)
    result: Mapped[str] = mapped_column(String(20), nullable=False)
    access_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_access_records_access_time", "access_time"),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<AccessRecord(id={self.id}, type={self.type}, result={self.result})>"
