"""
People Endpoints

CRUD operations for people with their cards and license plates, plus face
image upload. Requires the people permission.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from access_control.api.dependencies import DbSession, PeopleManager
from access_control.api.utils import validate_uuid
from access_control.config.constants import PersonType
from access_control.schemas.common import PaginatedResponse, PaginationMeta, PaginationParams
from access_control.schemas.person import (
    PersonCreate,
    PersonPatch,
    PersonResponse,
    PersonUpdate,
)
from access_control.services.person_service import PersonService


router = APIRouter()


# =============================================================================
# PERSON ENDPOINTS
# =============================================================================


@router.get("", response_model=PaginatedResponse[PersonResponse], summary="List people")
async def list_people(
    _current_user: PeopleManager,
    db: DbSession,
    pagination: Annotated[PaginationParams, Depends()],
    first_name: Annotated[Optional[str], Query()] = None,
    last_name: Annotated[Optional[str], Query()] = None,
    company: Annotated[Optional[str], Query()] = None,
    department: Annotated[Optional[str], Query()] = None,
    person_type: Annotated[Optional[PersonType], Query()] = None,
) -> PaginatedResponse[PersonResponse]:
    """List live people.

    Name, company and department filters match substrings case-insensitively.
    """
    people, total = await PersonService(db).list_people(
        offset=pagination.offset,
        limit=pagination.limit,
        first_name=first_name,
        last_name=last_name,
        company=company,
        department=department,
        person_type=person_type,
    )
    return PaginatedResponse[PersonResponse](
        data=people,
        pagination=PaginationMeta.create(
            page=pagination.page, per_page=pagination.per_page, total=total
        ),
    )


@router.post(
    "",
    response_model=PersonResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create person",
)
async def create_person(
    data: PersonCreate,
    _current_user: PeopleManager,
    db: DbSession,
) -> PersonResponse:
    """Create a person.

    Raises:
        400: Invalid field, repeated card or plate in the request
        404: Referenced rule or attendance not found
        409: person_id, card number or plate already in use
    """
    return await PersonService(db).create_person(data)


@router.get("/{person_id}", response_model=PersonResponse, summary="Get person")
async def get_person(
    person_id: str,
    _current_user: PeopleManager,
    db: DbSession,
) -> PersonResponse:
    person_uuid = validate_uuid(person_id, "person_id")
    return await PersonService(db).get_person(person_uuid)


@router.put("/{person_id}", response_model=PersonResponse, summary="Replace person")
async def update_person(
    person_id: str,
    data: PersonUpdate,
    _current_user: PeopleManager,
    db: DbSession,
) -> PersonResponse:
    person_uuid = validate_uuid(person_id, "person_id")
    return await PersonService(db).update_person(person_uuid, data)


@router.patch("/{person_id}", response_model=PersonResponse, summary="Update person")
async def partial_update_person(
    person_id: str,
    data: PersonPatch,
    _current_user: PeopleManager,
    db: DbSession,
) -> PersonResponse:
    person_uuid = validate_uuid(person_id, "person_id")
    return await PersonService(db).partial_update_person(person_uuid, data)


@router.delete(
    "/{person_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete person",
)
async def delete_person(
    person_id: str,
    _current_user: PeopleManager,
    db: DbSession,
) -> None:
    person_uuid = validate_uuid(person_id, "person_id")
    await PersonService(db).delete_person(person_uuid)


# =============================================================================
# FACE IMAGE ENDPOINTS
# =============================================================================


@router.put(
    "/{person_id}/face-image",
    response_model=PersonResponse,
    summary="Upload face image",
    description="Store a face image (jpg or png) and replace the previous one.",
)
async def upload_face_image(
    person_id: str,
    face_image: Annotated[UploadFile, File()],
    _current_user: PeopleManager,
    db: DbSession,
) -> PersonResponse:
    person_uuid = validate_uuid(person_id, "person_id")
    return await PersonService(db).set_face_image(person_uuid, face_image)


@router.delete(
    "/{person_id}/face-image",
    response_model=PersonResponse,
    summary="Remove face image",
)
async def remove_face_image(
    person_id: str,
    _current_user: PeopleManager,
    db: DbSession,
) -> PersonResponse:
    person_uuid = validate_uuid(person_id, "person_id")
    return await PersonService(db).remove_face_image(person_uuid)
