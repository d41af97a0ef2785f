"""
Access Record Service

Business logic for access records. A record may point at a person and at
the device that reported it; both must be live when written. Records are
hard deleted and own no child rows.
"""

from datetime import UTC, datetime
from typing import Any, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.config.constants import (
    RESOURCE_ACCESS_RECORD,
    RESOURCE_DEVICE,
    RESOURCE_PERSON,
    AccessRecordResult,
    AccessRecordType,
)
from access_control.core.exceptions import NotFoundError, ValidationError
from access_control.core.logging import logger
from access_control.db.repositories import AccessRecordRepository
from access_control.db.transaction import Transaction
from access_control.engine import (
    CascadeDeleter,
    ReferenceResolver,
    ResponseAssembler,
    parse_identifier,
)
from access_control.models.access_record import AccessRecord
from access_control.models.device import AccessControlDevice
from access_control.models.person import Person
from access_control.schemas.access_record import (
    AccessRecordCreate,
    AccessRecordDevice,
    AccessRecordPatch,
    AccessRecordPerson,
    AccessRecordResponse,
    AccessRecordUpdate,
)

PERSON_REFERENCE = ReferenceResolver(Person, RESOURCE_PERSON, field="person_id")
DEVICE_REFERENCE = ReferenceResolver(
    AccessControlDevice, RESOURCE_DEVICE, field="access_control_device_id"
)


def _column_values(data: AccessRecordCreate | AccessRecordPatch) -> dict[str, Any]:
    return {
        "person_id": (
            parse_identifier(data.person_id, "person_id") if data.person_id else None
        ),
        "access_control_device_id": (
            parse_identifier(data.access_control_device_id, "access_control_device_id")
            if data.access_control_device_id
            else None
        ),
        "type": data.type.value if data.type else None,
        "result": data.result.value if data.result else None,
        "access_time": data.access_time,
    }


class AccessRecordService:
    """Service for access record operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = AccessRecordRepository(session)
        self.assembler = ResponseAssembler(session)
        self.deleter = CascadeDeleter(AccessRecord, RESOURCE_ACCESS_RECORD, ())

    async def _check_references(self, values: dict[str, Any]) -> None:
        await PERSON_REFERENCE.ensure_one(self.session, values.get("person_id"))
        await DEVICE_REFERENCE.ensure_one(
            self.session, values.get("access_control_device_id")
        )

    async def create_access_record(self, data: AccessRecordCreate) -> AccessRecordResponse:
        """Create an access record.

        Raises:
            ValidationError: Malformed person or device id
            NotFoundError: Person or device missing or deleted
        """
        values = _column_values(data)

        async with Transaction(self.session) as tx:
            await self._check_references(values)
            record = await tx.repository(AccessRecordRepository).create(**values)

        logger.info(
            "Access record created",
            access_record_id=str(record.id),
            type=record.type,
            result=record.result,
        )
        return await self._to_response(record)

    async def get_access_record(self, record_id: UUID) -> AccessRecordResponse:
        record = await self.repo.get_live(record_id)
        if not record:
            raise NotFoundError(resource=RESOURCE_ACCESS_RECORD, resource_id=str(record_id))
        return await self._to_response(record)

    async def list_access_records(
        self,
        offset: int = 0,
        limit: int = 100,
        person_id: Optional[str] = None,
        access_control_device_id: Optional[str] = None,
        type: Optional[AccessRecordType] = None,
        result: Optional[AccessRecordResult] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> Tuple[list[AccessRecordResponse], int]:
        """List access records, newest first.

        since is inclusive and until is exclusive.

        Returns:
            Tuple of (records, total_count)
        """
        since, until = (
            bound.replace(tzinfo=UTC) if bound and bound.tzinfo is None else bound
            for bound in (since, until)
        )
        if since is not None and until is not None and until <= since:
            raise ValidationError(message="until must be after since", field="until")

        equals = {
            "person_id": parse_identifier(person_id, "person_id") if person_id else None,
            "access_control_device_id": (
                parse_identifier(access_control_device_id, "access_control_device_id")
                if access_control_device_id
                else None
            ),
            "type": type.value if type else None,
            "result": result.value if result else None,
        }

        records = await self.repo.search_records(
            offset=offset, limit=limit, equals=equals, since=since, until=until
        )
        total = await self.repo.count_records(equals=equals, since=since, until=until)
        return [await self._to_response(r) for r in records], total

    async def update_access_record(
        self, record_id: UUID, data: AccessRecordUpdate
    ) -> AccessRecordResponse:
        """Replace a record; an omitted person or device clears the reference."""
        values = _column_values(data)

        async with Transaction(self.session) as tx:
            records = tx.repository(AccessRecordRepository)
            if not await records.get_live(record_id):
                raise NotFoundError(
                    resource=RESOURCE_ACCESS_RECORD, resource_id=str(record_id)
                )

            await self._check_references(values)
            record = await records.overwrite(record_id, **values)

        logger.info("Access record updated", access_record_id=str(record_id))
        return await self._to_response(record)

    async def partial_update_access_record(
        self, record_id: UUID, data: AccessRecordPatch
    ) -> AccessRecordResponse:
        values = _column_values(data)

        async with Transaction(self.session) as tx:
            records = tx.repository(AccessRecordRepository)
            if not await records.get_live(record_id):
                raise NotFoundError(
                    resource=RESOURCE_ACCESS_RECORD, resource_id=str(record_id)
                )

            await self._check_references(values)
            record = await records.update(record_id, **values)

        logger.info("Access record patched", access_record_id=str(record_id))
        return await self._to_response(record)

    async def delete_access_record(self, record_id: UUID) -> None:
        async with Transaction(self.session) as tx:
            await self.deleter.delete(tx, record_id)

        logger.info("Access record deleted", access_record_id=str(record_id))

    async def _to_response(self, record: AccessRecord) -> AccessRecordResponse:
        person = await self.assembler.resolve_one(Person, record.person_id)
        device = await self.assembler.resolve_one(
            AccessControlDevice, record.access_control_device_id
        )

        return AccessRecordResponse(
            id=str(record.id),
            person=(
                AccessRecordPerson(
                    id=str(person.id),
                    first_name=person.first_name,
                    last_name=person.last_name,
                    company=person.company,
                    department=person.department,
                    job_position=person.job_position,
                )
                if person
                else None
            ),
            access_control_device=(
                AccessRecordDevice(
                    id=str(device.id),
                    name=device.name,
                    host_address=device.host_address,
                    type=device.type,
                )
                if device
                else None
            ),
            type=record.type,
            result=record.result,
            access_time=record.access_time,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
