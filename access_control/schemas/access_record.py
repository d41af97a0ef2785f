"""
Access Record Schemas

Request/response models for access record endpoints. access_time accepts
ISO 8601 ("2024-03-04T08:02:11Z") or "2024-03-04 08:02:11"; a value
without an offset is taken as UTC.
"""

from datetime import UTC, datetime

from pydantic import field_validator

from access_control.config.constants import AccessRecordResult, AccessRecordType
from access_control.schemas.common import BaseSchema, RequestSchema


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class AccessRecordCreate(RequestSchema):
    """Schema for creating an access record."""

    person_id: str | None = None
    access_control_device_id: str | None = None
    type: AccessRecordType
    result: AccessRecordResult
    access_time: datetime

    @field_validator("access_time")
    @classmethod
    def access_time_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


class AccessRecordUpdate(AccessRecordCreate):
    """Schema for replacing an access record (PUT)."""


class AccessRecordPatch(RequestSchema):
    """Schema for partially updating an access record (PATCH)."""

    person_id: str | None = None
    access_control_device_id: str | None = None
    type: AccessRecordType | None = None
    result: AccessRecordResult | None = None
    access_time: datetime | None = None

    @field_validator("access_time")
    @classmethod
    def access_time_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class AccessRecordPerson(BaseSchema):
    """Person as shown inside an access record."""

    id: str
    first_name: str
    last_name: str
    company: str | None
    department: str | None
    job_position: str | None


class AccessRecordDevice(BaseSchema):
    """Device as shown inside an access record."""

    id: str
    name: str
    host_address: str
    type: str


class AccessRecordResponse(BaseSchema):
    """Schema for access record response."""

    id: str
    person: AccessRecordPerson | None
    access_control_device: AccessRecordDevice | None
    type: AccessRecordType
    result: AccessRecordResult
    access_time: datetime
    created_at: datetime
    updated_at: datetime
