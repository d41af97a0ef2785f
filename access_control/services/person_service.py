"""
Person Service

Business logic for people and their identity credentials:

    Person
        ├── PersonCard         (card numbers, unique across all people)
        └── PersonLicensePlate (plate texts, unique across all people)

A person also references one rule and one attendance definition; both must
be live when written. The face image is stored through LocalFileStore
outside the database transaction.
"""

import datetime
from typing import Any, Optional, Tuple
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from access_control.config.constants import (
    RESOURCE_ATTENDANCE,
    RESOURCE_PERSON,
    RESOURCE_RULE,
    PersonType,
)
from access_control.config.settings import settings
from access_control.core.exceptions import PersonNotFoundError, ValidationError
from access_control.core.logging import logger
from access_control.core.utils import find_duplicates
from access_control.db.repositories import PersonRepository
from access_control.db.transaction import Transaction
from access_control.engine import (
    AssociationReplacer,
    CascadeDeleter,
    ReferenceResolver,
    ResponseAssembler,
    UniquenessValidator,
    expand_person_defaults,
    parse_identifier,
)
from access_control.models.attendance import Attendance
from access_control.models.person import Person, PersonCard, PersonLicensePlate
from access_control.models.rule import AccessControlRule
from access_control.schemas.common import NamedReference
from access_control.schemas.person import (
    PersonCreate,
    PersonFields,
    PersonPatch,
    PersonResponse,
    PersonUpdate,
)
from access_control.storage.file_store import LocalFileStore

PERSON_CARDS = AssociationReplacer(PersonCard, "person_id", order_by=("card_number",))
PERSON_PLATES = AssociationReplacer(
    PersonLicensePlate, "person_id", order_by=("license_plate_text",)
)

RULE_REFERENCE = ReferenceResolver(
    AccessControlRule, RESOURCE_RULE, field="access_control_rule_id"
)
ATTENDANCE_REFERENCE = ReferenceResolver(
    Attendance, RESOURCE_ATTENDANCE, field="time_attendance_id"
)

# Scalar columns written from request bodies (face_image_path has its own endpoint)
PERSON_SCALARS = (
    "first_name",
    "middle_name",
    "last_name",
    "person_id",
    "gender",
    "date_of_birth",
    "company",
    "department",
    "job_position",
    "address",
    "mobile_number",
    "email",
    "is_verified",
    "active_at",
    "expire_at",
)


class PersonService:
    """Service for person operations."""

    def __init__(
        self,
        session: AsyncSession,
        file_store: Optional[LocalFileStore] = None,
    ) -> None:
        self.session = session
        self.repo = PersonRepository(session)
        self.file_store = file_store or LocalFileStore()
        self.assembler = ResponseAssembler(session)
        self.external_ids = UniquenessValidator(
            session, Person, "person_id", resource=RESOURCE_PERSON
        )
        self.cards = UniquenessValidator(
            session,
            PersonCard,
            "card_number",
            resource="Person card",
            owner_column="person_id",
        )
        self.plates = UniquenessValidator(
            session,
            PersonLicensePlate,
            "license_plate_text",
            resource="Person license plate",
            owner_column="person_id",
        )
        self.deleter = CascadeDeleter(
            Person, RESOURCE_PERSON, (PERSON_CARDS, PERSON_PLATES)
        )

    # =========================================================================
    # VALIDATION HELPERS
    # =========================================================================

    @staticmethod
    def _check_request_duplicates(values: list[str] | None, field: str) -> None:
        duplicates = find_duplicates(values or [])
        if duplicates:
            raise ValidationError(
                message=f"Duplicate values in {field}: {', '.join(duplicates)}",
                field=field,
            )

    @staticmethod
    def _parse_references(data: PersonFields) -> dict[str, Optional[UUID]]:
        return {
            "access_control_rule_id": (
                parse_identifier(data.access_control_rule_id, "access_control_rule_id")
                if data.access_control_rule_id
                else None
            ),
            "time_attendance_id": (
                parse_identifier(data.time_attendance_id, "time_attendance_id")
                if data.time_attendance_id
                else None
            ),
        }

    def _validate_request(self, data: PersonFields) -> dict[str, Optional[UUID]]:
        """Checks that need no database access; returns parsed references."""
        self._check_request_duplicates(data.card_numbers, "card_numbers")
        self._check_request_duplicates(data.license_plate_texts, "license_plate_texts")
        return self._parse_references(data)

    async def _check_unique_values(
        self, data: PersonFields, exclude_id: Optional[UUID] = None
    ) -> None:
        await self.external_ids.ensure_unique(data.person_id, exclude_id=exclude_id)
        await self.cards.ensure_all_unique(data.card_numbers or [], exclude_id=exclude_id)
        await self.plates.ensure_all_unique(
            data.license_plate_texts or [], exclude_id=exclude_id
        )

    async def _check_references(
        self, references: dict[str, Optional[UUID]]
    ) -> None:
        await RULE_REFERENCE.ensure_one(
            self.session, references["access_control_rule_id"]
        )
        await ATTENDANCE_REFERENCE.ensure_one(
            self.session, references["time_attendance_id"]
        )

    @staticmethod
    def _scalar_values(data: PersonFields) -> dict[str, Any]:
        values = {field: getattr(data, field, None) for field in PERSON_SCALARS}
        person_type = getattr(data, "person_type", None)
        values["person_type"] = person_type.value if person_type else None
        return values

    @staticmethod
    def _card_rows(
        numbers: list[str],
        active_at: Optional[datetime.date],
        expire_at: Optional[datetime.date],
    ) -> list[dict]:
        return [
            {
                "card_number": number,
                "active_at": active_at,
                "expire_at": expire_at,
            }
            for number in numbers
        ]

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create_person(self, data: PersonCreate) -> PersonResponse:
        """Create a person with cards and license plates.

        Raises:
            ValidationError: Repeated card/plate in the request, malformed id
            DuplicateError: person_id, card or plate held by another person
            NotFoundError: Referenced rule or attendance missing
        """
        data = expand_person_defaults(data)
        references = self._validate_request(data)

        values = self._scalar_values(data)
        values["is_verified"] = bool(data.is_verified)

        async with Transaction(self.session) as tx:
            await self._check_unique_values(data)
            await self._check_references(references)

            person = await tx.repository(PersonRepository).create(**values, **references)
            await PERSON_CARDS.replace(
                tx,
                person.id,
                self._card_rows(data.card_numbers, data.active_at, data.expire_at),
            )
            await PERSON_PLATES.replace(
                tx,
                person.id,
                [{"license_plate_text": text} for text in data.license_plate_texts],
            )

        logger.info(
            "Person created",
            person_id=str(person.id),
            person_type=person.person_type,
            card_count=len(data.card_numbers),
        )
        return await self._to_response(person)

    async def get_person(self, person_id: UUID) -> PersonResponse:
        person = await self.repo.get_live(person_id)
        if not person:
            raise PersonNotFoundError(str(person_id))
        return await self._to_response(person)

    async def list_people(
        self,
        offset: int = 0,
        limit: int = 100,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        company: Optional[str] = None,
        department: Optional[str] = None,
        person_type: Optional[PersonType] = None,
    ) -> Tuple[list[PersonResponse], int]:
        """List live people.

        Name, company and department match as case-insensitive substrings;
        person_type matches exactly.

        Returns:
            Tuple of (people, total_count)
        """
        contains = {
            "first_name": first_name,
            "last_name": last_name,
            "company": company,
            "department": department,
        }
        equals = {"person_type": person_type.value if person_type else None}

        people = await self.repo.search(
            offset=offset, limit=limit, contains=contains, equals=equals
        )
        total = await self.repo.count_search(contains=contains, equals=equals)
        return [await self._to_response(p) for p in people], total

    async def update_person(self, person_id: UUID, data: PersonUpdate) -> PersonResponse:
        """Replace a person.

        Optional fields left out of the body are cleared, and cards and plates
        become exactly the lists sent (empty when omitted). The face image is
        kept.
        """
        data = expand_person_defaults(data)
        references = self._validate_request(data)

        values = self._scalar_values(data)
        values["is_verified"] = bool(data.is_verified)

        async with Transaction(self.session) as tx:
            people = tx.repository(PersonRepository)
            if not await people.get_live(person_id):
                raise PersonNotFoundError(str(person_id))

            await self._check_unique_values(data, exclude_id=person_id)
            await self._check_references(references)

            person = await people.overwrite(person_id, **values, **references)
            await PERSON_CARDS.replace(
                tx,
                person_id,
                self._card_rows(data.card_numbers, data.active_at, data.expire_at),
            )
            await PERSON_PLATES.replace(
                tx,
                person_id,
                [{"license_plate_text": text} for text in data.license_plate_texts],
            )

        logger.info("Person updated", person_id=str(person_id))
        return await self._to_response(person)

    async def partial_update_person(
        self, person_id: UUID, data: PersonPatch
    ) -> PersonResponse:
        """Merge provided fields; cards and plates change only when sent."""
        references = self._validate_request(data)

        async with Transaction(self.session) as tx:
            people = tx.repository(PersonRepository)
            current = await people.get_live(person_id)
            if not current:
                raise PersonNotFoundError(str(person_id))

            active_at = data.active_at or current.active_at
            expire_at = data.expire_at or current.expire_at
            if active_at and expire_at and expire_at < active_at:
                raise ValidationError(
                    message="expire_at must not be before active_at",
                    field="expire_at",
                )

            await self._check_unique_values(data, exclude_id=person_id)
            await self._check_references(references)

            person = await people.update(
                person_id, **self._scalar_values(data), **references
            )

            if data.card_numbers is not None:
                await PERSON_CARDS.replace(
                    tx,
                    person_id,
                    self._card_rows(data.card_numbers, active_at, expire_at),
                )
            elif data.active_at is not None or data.expire_at is not None:
                # Kept cards follow the person's new validity window
                cards = await PERSON_CARDS.list_for(tx.session, person_id)
                await PERSON_CARDS.replace(
                    tx,
                    person_id,
                    self._card_rows(
                        [card.card_number for card in cards], active_at, expire_at
                    ),
                )
            if data.license_plate_texts is not None:
                await PERSON_PLATES.replace(
                    tx,
                    person_id,
                    [{"license_plate_text": t} for t in data.license_plate_texts],
                )

        logger.info("Person patched", person_id=str(person_id))
        return await self._to_response(person)

    async def delete_person(self, person_id: UUID) -> None:
        """Hard delete a person with cards and plates, then drop the face image."""
        person = await self.repo.get_live(person_id)
        image_path = person.face_image_path if person else None

        async with Transaction(self.session) as tx:
            await self.deleter.delete(tx, person_id)

        if image_path:
            await self.file_store.delete(image_path)

        logger.info("Person deleted", person_id=str(person_id))

    # =========================================================================
    # FACE IMAGE
    # =========================================================================

    async def set_face_image(self, person_id: UUID, upload: UploadFile) -> PersonResponse:
        """Store a new face image and point the person at it.

        The previous image file is removed once the new path is committed.
        If the database write fails the newly stored file is removed instead.
        """
        person = await self.repo.get_live(person_id)
        if not person:
            raise PersonNotFoundError(str(person_id))
        previous_path = person.face_image_path

        new_path = await self.file_store.save(upload, settings.FACE_IMAGE_FOLDER)
        try:
            async with Transaction(self.session) as tx:
                person = await tx.repository(PersonRepository).overwrite(
                    person_id, face_image_path=new_path
                )
        except Exception:
            await self.file_store.delete(new_path)
            raise

        if previous_path:
            await self.file_store.delete(previous_path)

        logger.info("Face image updated", person_id=str(person_id), path=new_path)
        return await self._to_response(person)

    async def remove_face_image(self, person_id: UUID) -> PersonResponse:
        person = await self.repo.get_live(person_id)
        if not person:
            raise PersonNotFoundError(str(person_id))
        previous_path = person.face_image_path

        async with Transaction(self.session) as tx:
            person = await tx.repository(PersonRepository).overwrite(
                person_id, face_image_path=None
            )

        if previous_path:
            await self.file_store.delete(previous_path)

        logger.info("Face image removed", person_id=str(person_id))
        return await self._to_response(person)

    async def _to_response(self, person: Person) -> PersonResponse:
        cards = await PERSON_CARDS.list_for(self.session, person.id)
        plates = await PERSON_PLATES.list_for(self.session, person.id)
        rule = await self.assembler.resolve_one(
            AccessControlRule, person.access_control_rule_id
        )
        attendance = await self.assembler.resolve_one(
            Attendance, person.time_attendance_id
        )

        return PersonResponse(
            id=str(person.id),
            first_name=person.first_name,
            middle_name=person.middle_name,
            last_name=person.last_name,
            person_type=person.person_type,
            person_id=person.person_id,
            gender=person.gender,
            date_of_birth=person.date_of_birth,
            company=person.company,
            department=person.department,
            job_position=person.job_position,
            address=person.address,
            mobile_number=person.mobile_number,
            email=person.email,
            face_image_path=person.face_image_path,
            is_verified=person.is_verified,
            active_at=person.active_at,
            expire_at=person.expire_at,
            card_numbers=[card.card_number for card in cards],
            license_plate_texts=[plate.license_plate_text for plate in plates],
            access_control_rule=(
                NamedReference(id=str(rule.id), name=rule.name) if rule else None
            ),
            time_attendance=(
                NamedReference(id=str(attendance.id), name=attendance.name)
                if attendance
                else None
            ),
            created_at=person.created_at,
            updated_at=person.updated_at,
        )
