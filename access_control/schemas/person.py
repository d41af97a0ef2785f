"""
Person Schemas

Request/response models for people endpoints.

Cards and license plates are plain strings on the wire; each becomes one
child row. Omitted or null on create/full update means "none"; on PATCH an
omitted list leaves the current rows untouched. The face image is not part
of these bodies, it has its own multipart endpoint.
"""

import datetime

from pydantic import EmailStr, Field, field_validator, model_validator

from access_control.config.constants import PersonType
from access_control.schemas.common import BaseSchema, NamedReference, RequestSchema


def _clean_identifiers(values: list[str] | None) -> list[str] | None:
    if values is None:
        return None
    cleaned = [value.strip() for value in values]
    if any(not value for value in cleaned):
        raise ValueError("values must not be blank")
    return cleaned


class PersonFields(RequestSchema):
    """Optional scalar fields shared by every person body."""

    middle_name: str | None = Field(None, max_length=255)
    person_id: str | None = Field(
        None, max_length=100, description="External identifier, unique when set"
    )
    gender: str | None = Field(None, max_length=20)
    date_of_birth: datetime.date | None = None
    company: str | None = Field(None, max_length=255)
    department: str | None = Field(None, max_length=255)
    job_position: str | None = Field(None, max_length=255)
    address: str | None = Field(None, max_length=1024)
    mobile_number: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    is_verified: bool | None = None
    active_at: datetime.date | None = None
    expire_at: datetime.date | None = None
    access_control_rule_id: str | None = None
    time_attendance_id: str | None = None
    card_numbers: list[str] | None = None
    license_plate_texts: list[str] | None = None

    @field_validator("card_numbers", "license_plate_texts")
    @classmethod
    def strip_identifiers(cls, values: list[str] | None) -> list[str] | None:
        return _clean_identifiers(values)

    @model_validator(mode="after")
    def check_validity_window(self) -> "PersonFields":
        if self.active_at and self.expire_at and self.expire_at < self.active_at:
            raise ValueError("expire_at must not be before active_at")
        return self


class PersonCreate(PersonFields):
    """Schema for creating a person."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    person_type: PersonType


class PersonUpdate(PersonCreate):
    """Schema for replacing a person (PUT); omitted optional fields are cleared."""


class PersonPatch(PersonFields):
    """Schema for partially updating a person (PATCH)."""

    first_name: str | None = Field(None, min_length=1, max_length=255)
    last_name: str | None = Field(None, min_length=1, max_length=255)
    person_type: PersonType | None = None


class PersonResponse(BaseSchema):
    """Schema for person response."""

    id: str
    first_name: str
    middle_name: str | None
    last_name: str
    person_type: PersonType
    person_id: str | None
    gender: str | None
    date_of_birth: datetime.date | None
    company: str | None
    department: str | None
    job_position: str | None
    address: str | None
    mobile_number: str | None
    email: str | None
    face_image_path: str | None
    is_verified: bool
    active_at: datetime.date | None
    expire_at: datetime.date | None
    card_numbers: list[str]
    license_plate_texts: list[str]
    access_control_rule: NamedReference | None
    time_attendance: NamedReference | None
    created_at: datetime.datetime
    updated_at: datetime.datetime
