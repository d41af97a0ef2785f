"""
Person Models

A person is anyone enrolled for physical access: employees and visitors.

    Person (parent)
        ├── PersonCard         (N) → unique card_number
        └── PersonLicensePlate (N) → unique license_plate_text

A person also points at one AccessControlRule and one Attendance. Those are
plain references validated on write; deleting the rule later leaves the
reference dangling and the read view shows it as null.

SAMPLE PERSON RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                      │ 880e8400-e29b-41d4-a716-446655440003               │
│ first_name / last_name  │ "Somchai" / "Jaidee"                               │
│ person_type             │ "employee"                                         │
│ person_id               │ "EMP-0042"     (unique among live people)          │
│ company / department    │ "Acme" / "Engineering"                             │
│ face_image_path         │ "images/faces/people/3f2c....jpg"                  │
│ active_at / expire_at   │ 2024-01-01 / 2024-12-31                            │
│ access_control_rule_id  │ 990e8400-...                                       │
│ time_attendance_id      │ aa0e8400-...                                       │
└──────────────────────────────────────────────────────────────────────────────┘
"""

import datetime
import uuid
from enum import Enum
from typing import ClassVar

from sqlalchemy import Boolean, Column, Date, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from access_control.config.constants import PersonType
from access_control.models.base import (
    Base,
    EnumValidationMixin,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class Person(
    Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, EnumValidationMixin
):
    """
    Enrolled person.

    Attributes:
        first_name / middle_name / last_name: Name parts
        person_type: employee or visitor
        person_id: External identifier (employee code, visitor pass), optional
        face_image_path: Path relative to the upload root, set via the face image endpoint
        active_at / expire_at: Validity window (inclusive dates)
        access_control_rule_id: Rule granting device access
        time_attendance_id: Attendance definition for clock events
    """

    __tablename__ = "people"

    _enum_fields: ClassVar[dict[str, type[Enum]]] = {
        "person_type": PersonType,
    }

    # ==========================================================================
    # IDENTITY FIELDS
    # ==========================================================================

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    person_type: Mapped[str] = mapped_column(String(20), nullable=False)
    person_id: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # ==========================================================================
    # PROFILE
    # ==========================================================================

    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    date_of_birth: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    mobile_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    face_image_path: Mapped[str | None] = mapped_column(String(512), nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # ==========================================================================
    # VALIDITY WINDOW
    # ==========================================================================

    active_at: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    expire_at: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)

    # ==========================================================================
    # REFERENCES
    # ==========================================================================

    access_control_rule_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        nullable=True,
        index=True,
    )
    time_attendance_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        nullable=True,
        index=True,
    )

    __table_args__ = (
        Index(
            "uq_people_person_id",
            "person_id",
            unique=True,
            postgresql_where=(
                (Column("person_id").isnot(None)) & (Column("deleted_at").is_(None))
            ),
            sqlite_where=(
                (Column("person_id").isnot(None)) & (Column("deleted_at").is_(None))
            ),
        ),
        Index("ix_people_last_first", "last_name", "first_name"),
    )

    @property
    def full_name(self) -> str:
        """First, middle and last name joined with spaces."""
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(part for part in parts if part)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Person(id={self.id}, name={self.full_name})>"


class PersonCard(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """An access card issued to a person."""

    __tablename__ = "person_cards"

    person_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
        doc="Owning person",
    )
    card_number: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
    )
    active_at: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    expire_at: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<PersonCard(person={self.person_id}, card={self.card_number})>"


class PersonLicensePlate(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A vehicle license plate registered to a person."""

    __tablename__ = "person_license_plates"

    person_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
        doc="Owning person",
    )
    license_plate_text: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<PersonLicensePlate(person={self.person_id}, "
            f"plate={self.license_plate_text})>"
        )
