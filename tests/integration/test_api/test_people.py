"""
People API Integration Tests

Endpoints Tested:
    - GET    /api/v1/people                       - List people
    - POST   /api/v1/people                       - Create person
    - GET    /api/v1/people/{id}                  - Get person
    - PUT    /api/v1/people/{id}                  - Replace person
    - PATCH  /api/v1/people/{id}                  - Partially update person
    - DELETE /api/v1/people/{id}                  - Delete person
    - PUT    /api/v1/people/{id}/face-image       - Upload face image
    - DELETE /api/v1/people/{id}/face-image       - Remove face image

Authorization Rules:
    - Every endpoint requires the people permission

Test Categories:
    1. Success Cases - Happy path scenarios
    2. Uniqueness - Cards, plates and external ids across people
    3. Validation Errors - Invalid input handling
    4. Face Image - Multipart upload and cleanup
"""

from datetime import date
from pathlib import Path
from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from access_control.config.settings import settings
from access_control.models.person import PersonCard

# pylint: disable=unused-argument

PEOPLE_URL = "/api/v1/people"

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


@pytest.fixture
def upload_dir(tmp_path, monkeypatch) -> Path:
    """Point stored uploads at a temporary directory."""
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


async def _create_person(client: AsyncClient, headers: dict, **fields) -> dict:
    body = {"first_name": "Ada", "last_name": "Lovelace", "person_type": "employee"}
    body.update(fields)
    response = await client.post(PEOPLE_URL, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# CREATE PERSON TESTS
# =============================================================================


class TestCreatePerson:
    """
    Tests for POST /api/v1/people endpoint.

    Request Body:
        - first_name, last_name, person_type (required)
        - person_id (str, optional): External identifier, unique when set
        - card_numbers (list[str], optional): One card row each
        - license_plate_texts (list[str], optional): One plate row each
        - access_control_rule_id, time_attendance_id (optional references)
    """

    # -------------------------------------------------------------------------
    # Success Cases
    # -------------------------------------------------------------------------

    async def test_create_person_full(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_rule,
        test_attendance,
    ):
        """
        Given: A live rule and attendance definition
        When: POST a person with cards, plates and both references
        Then: Returns 201 with every collection and both references resolved
        """
        data = await _create_person(
            client,
            auth_headers,
            person_id="EMP-001",
            email="ada@example.com",
            company="Analytical Engines",
            card_numbers=["C-200", "C-100"],
            license_plate_texts=["B 1234 XY"],
            access_control_rule_id=test_rule["id"],
            time_attendance_id=test_attendance["id"],
            active_at="2026-01-01",
            expire_at="2026-12-31",
        )

        assert data["first_name"] == "Ada"
        assert data["person_type"] == "employee"
        assert data["person_id"] == "EMP-001"
        assert sorted(data["card_numbers"]) == ["C-100", "C-200"]
        assert data["license_plate_texts"] == ["B 1234 XY"]
        assert data["access_control_rule"] == {
            "id": test_rule["id"],
            "name": "Office Hours",
        }
        assert data["time_attendance"]["id"] == test_attendance["id"]
        assert data["is_verified"] is False
        assert data["face_image_path"] is None

    async def test_create_person_minimal(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: Only the required fields
        When: POST
        Then: Collections are empty and references are null
        """
        data = await _create_person(client, auth_headers, person_type="visitor")

        assert data["card_numbers"] == []
        assert data["license_plate_texts"] == []
        assert data["access_control_rule"] is None
        assert data["time_attendance"] is None

    # -------------------------------------------------------------------------
    # Uniqueness
    # -------------------------------------------------------------------------

    async def test_create_person_card_held_by_other_person(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A person holding card "C-1"
        When: POST another person with card "C-1"
        Then: Returns 409 naming card_number; the second person is not stored
        """
        await _create_person(client, auth_headers, card_numbers=["C-1"])

        response = await client.post(
            PEOPLE_URL,
            json={
                "first_name": "Grace",
                "last_name": "Hopper",
                "person_type": "employee",
                "card_numbers": ["C-1"],
            },
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["details"]["field"] == "card_number"

        listing = await client.get(PEOPLE_URL, headers=auth_headers)
        assert listing.json()["pagination"]["total"] == 1

    async def test_create_person_plate_held_by_other_person(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A person holding plate "AB 123"
        When: POST another person with the same plate
        Then: Returns 409
        """
        await _create_person(client, auth_headers, license_plate_texts=["AB 123"])

        response = await client.post(
            PEOPLE_URL,
            json={
                "first_name": "Grace",
                "last_name": "Hopper",
                "person_type": "employee",
                "license_plate_texts": ["AB 123"],
            },
            headers=auth_headers,
        )

        assert response.status_code == 409

    async def test_create_person_duplicate_external_id(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A person with person_id "EMP-9"
        When: POST another person with "EMP-9"
        Then: Returns 409 naming person_id
        """
        await _create_person(client, auth_headers, person_id="EMP-9")

        response = await client.post(
            PEOPLE_URL,
            json={
                "first_name": "Grace",
                "last_name": "Hopper",
                "person_type": "employee",
                "person_id": "EMP-9",
            },
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["details"]["field"] == "person_id"

    async def test_create_person_repeated_card_in_request(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: The same card listed twice in one request
        When: POST
        Then: Returns 400 naming card_numbers
        """
        response = await client.post(
            PEOPLE_URL,
            json={
                "first_name": "Ada",
                "last_name": "Lovelace",
                "person_type": "employee",
                "card_numbers": ["C-5", "C-5"],
            },
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["details"]["field"] == "card_numbers"

    # -------------------------------------------------------------------------
    # Validation Errors
    # -------------------------------------------------------------------------

    async def test_create_person_unknown_rule(
        self,
        client: AsyncClient,
        auth_headers: dict,
        make_uuid,
    ):
        """
        Given: A rule id that does not exist
        When: POST
        Then: Returns 404 and nothing is stored
        """
        response = await client.post(
            PEOPLE_URL,
            json={
                "first_name": "Ada",
                "last_name": "Lovelace",
                "person_type": "employee",
                "card_numbers": ["C-77"],
                "access_control_rule_id": make_uuid(),
            },
            headers=auth_headers,
        )

        assert response.status_code == 404

        # The card was not claimed by the failed write
        await _create_person(client, auth_headers, card_numbers=["C-77"])

    async def test_create_person_expire_before_active(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: expire_at earlier than active_at
        When: POST
        Then: Returns 400
        """
        response = await client.post(
            PEOPLE_URL,
            json={
                "first_name": "Ada",
                "last_name": "Lovelace",
                "person_type": "employee",
                "active_at": "2026-06-01",
                "expire_at": "2026-01-01",
            },
            headers=auth_headers,
        )

        assert response.status_code == 400

    async def test_create_person_invalid_type(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: An unknown person_type
        When: POST
        Then: Returns 400
        """
        response = await client.post(
            PEOPLE_URL,
            json={"first_name": "Ada", "last_name": "Lovelace", "person_type": "robot"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    async def test_create_person_without_people_permission(
        self,
        client: AsyncClient,
        limited_headers: dict,
    ):
        """
        Given: A user without the people permission
        When: POST
        Then: Returns 403
        """
        response = await client.post(
            PEOPLE_URL,
            json={"first_name": "Ada", "last_name": "Lovelace", "person_type": "employee"},
            headers=limited_headers,
        )

        assert response.status_code == 403


# =============================================================================
# LIST PEOPLE TESTS
# =============================================================================


class TestListPeople:
    """Tests for GET /api/v1/people endpoint."""

    async def test_list_people_filters(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: An employee at "Acme" and a visitor at "Globex"
        When: GET list filtered by company and by person_type
        Then: Each filter returns the matching person only
        """
        await _create_person(client, auth_headers, company="Acme Corp")
        await _create_person(
            client,
            auth_headers,
            first_name="Grace",
            person_type="visitor",
            company="Globex",
        )

        by_company = await client.get(
            PEOPLE_URL, params={"company": "acme"}, headers=auth_headers
        )
        by_type = await client.get(
            PEOPLE_URL, params={"person_type": "visitor"}, headers=auth_headers
        )

        assert [p["company"] for p in by_company.json()["data"]] == ["Acme Corp"]
        assert [p["first_name"] for p in by_type.json()["data"]] == ["Grace"]


# =============================================================================
# UPDATE PERSON TESTS
# =============================================================================


class TestUpdatePerson:
    """Tests for PUT /api/v1/people/{id} endpoint."""

    async def test_update_person_keeps_own_card(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A person holding cards "C-1" and "C-2"
        When: PUT with cards "C-2" and "C-3"
        Then: Returns 200; owning "C-2" already is not a conflict
        """
        person = await _create_person(client, auth_headers, card_numbers=["C-1", "C-2"])

        response = await client.put(
            f"{PEOPLE_URL}/{person['id']}",
            json={
                "first_name": "Ada",
                "last_name": "Lovelace",
                "person_type": "employee",
                "card_numbers": ["C-2", "C-3"],
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert sorted(response.json()["card_numbers"]) == ["C-2", "C-3"]

    async def test_update_person_released_card_can_be_reused(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: Person A dropped card "C-1" in an update
        When: Person B is created with "C-1"
        Then: Returns 201
        """
        person = await _create_person(client, auth_headers, card_numbers=["C-1"])
        await client.put(
            f"{PEOPLE_URL}/{person['id']}",
            json={"first_name": "Ada", "last_name": "Lovelace", "person_type": "employee"},
            headers=auth_headers,
        )

        data = await _create_person(
            client, auth_headers, first_name="Grace", card_numbers=["C-1"]
        )

        assert data["card_numbers"] == ["C-1"]

    async def test_update_person_clears_omitted_fields(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_rule,
    ):
        """
        Given: A person with a company, a rule and a plate
        When: PUT with only the required fields
        Then: Company, rule and plates are cleared
        """
        person = await _create_person(
            client,
            auth_headers,
            company="Acme",
            access_control_rule_id=test_rule["id"],
            license_plate_texts=["XY 1"],
        )

        response = await client.put(
            f"{PEOPLE_URL}/{person['id']}",
            json={"first_name": "Ada", "last_name": "Lovelace", "person_type": "employee"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["company"] is None
        assert data["access_control_rule"] is None
        assert data["license_plate_texts"] == []

    async def test_update_person_card_conflict_is_atomic(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: Person A holds "C-1", person B holds "C-2"
        When: PUT B renaming it and taking "C-1"
        Then: Returns 409; B keeps its name and card "C-2"
        """
        await _create_person(client, auth_headers, card_numbers=["C-1"])
        other = await _create_person(
            client, auth_headers, first_name="Grace", card_numbers=["C-2"]
        )

        response = await client.put(
            f"{PEOPLE_URL}/{other['id']}",
            json={
                "first_name": "Renamed",
                "last_name": "Hopper",
                "person_type": "employee",
                "card_numbers": ["C-1"],
            },
            headers=auth_headers,
        )

        assert response.status_code == 409

        fetched = await client.get(f"{PEOPLE_URL}/{other['id']}", headers=auth_headers)
        assert fetched.json()["first_name"] == "Grace"
        assert fetched.json()["card_numbers"] == ["C-2"]


class TestPatchPerson:
    """Tests for PATCH /api/v1/people/{id} endpoint."""

    async def test_patch_person_keeps_unsent_collections(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A person with a card and a plate
        When: PATCH only the department
        Then: Card and plate are untouched
        """
        person = await _create_person(
            client, auth_headers, card_numbers=["C-1"], license_plate_texts=["P-1"]
        )

        response = await client.patch(
            f"{PEOPLE_URL}/{person['id']}",
            json={"department": "Research"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["department"] == "Research"
        assert data["card_numbers"] == ["C-1"]
        assert data["license_plate_texts"] == ["P-1"]

    async def test_patch_person_window_moves_kept_cards(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_db: AsyncSession,
    ):
        """
        Given: A person with card C-1 valid 2026-01-01..2026-06-30
        When: PATCH only expire_at to 2027-12-31
        Then: The card keeps its number and takes the new window
        """
        person = await _create_person(
            client,
            auth_headers,
            card_numbers=["C-1"],
            active_at="2026-01-01",
            expire_at="2026-06-30",
        )

        response = await client.patch(
            f"{PEOPLE_URL}/{person['id']}",
            json={"expire_at": "2027-12-31"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["card_numbers"] == ["C-1"]

        result = await test_db.execute(
            select(PersonCard.active_at, PersonCard.expire_at).where(
                PersonCard.person_id == UUID(person["id"])
            )
        )
        assert result.all() == [(date(2026, 1, 1), date(2027, 12, 31))]

    async def test_patch_person_expire_before_stored_active(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A person active from 2026-06-01
        When: PATCH expire_at to 2026-01-01
        Then: Returns 400
        """
        person = await _create_person(client, auth_headers, active_at="2026-06-01")

        response = await client.patch(
            f"{PEOPLE_URL}/{person['id']}",
            json={"expire_at": "2026-01-01"},
            headers=auth_headers,
        )

        assert response.status_code == 400


# =============================================================================
# DELETE PERSON TESTS
# =============================================================================


class TestDeletePerson:
    """Tests for DELETE /api/v1/people/{id} endpoint."""

    async def test_delete_person_releases_cards(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A person holding card "C-1"
        When: DELETE the person, then create another with "C-1"
        Then: Delete returns 204 and the card can be reused
        """
        person = await _create_person(client, auth_headers, card_numbers=["C-1"])

        response = await client.delete(f"{PEOPLE_URL}/{person['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert (
            await client.get(f"{PEOPLE_URL}/{person['id']}", headers=auth_headers)
        ).status_code == 404
        await _create_person(client, auth_headers, first_name="Grace", card_numbers=["C-1"])


# =============================================================================
# FACE IMAGE TESTS
# =============================================================================


class TestFaceImage:
    """Tests for PUT/DELETE /api/v1/people/{id}/face-image endpoints."""

    async def test_upload_face_image(
        self,
        client: AsyncClient,
        auth_headers: dict,
        upload_dir: Path,
    ):
        """
        Given: A person without a face image
        When: PUT a jpg as multipart form data
        Then: The stored path is returned and the file exists on disk
        """
        person = await _create_person(client, auth_headers)

        response = await client.put(
            f"{PEOPLE_URL}/{person['id']}/face-image",
            files={"face_image": ("face.jpg", JPEG_BYTES, "image/jpeg")},
            headers=auth_headers,
        )

        assert response.status_code == 200
        path = response.json()["face_image_path"]
        assert path.startswith(settings.FACE_IMAGE_FOLDER)
        assert path.endswith(".jpg")
        assert (upload_dir / path).read_bytes() == JPEG_BYTES

    async def test_replace_face_image_removes_previous_file(
        self,
        client: AsyncClient,
        auth_headers: dict,
        upload_dir: Path,
    ):
        """
        Given: A person with a stored face image
        When: PUT a new image
        Then: The old file is removed and the new one is kept
        """
        person = await _create_person(client, auth_headers)
        url = f"{PEOPLE_URL}/{person['id']}/face-image"

        first = await client.put(
            url,
            files={"face_image": ("a.jpg", JPEG_BYTES, "image/jpeg")},
            headers=auth_headers,
        )
        second = await client.put(
            url,
            files={"face_image": ("b.png", b"\x89PNG" + b"\x00" * 32, "image/png")},
            headers=auth_headers,
        )

        old_path = first.json()["face_image_path"]
        new_path = second.json()["face_image_path"]
        assert old_path != new_path
        assert not (upload_dir / old_path).exists()
        assert (upload_dir / new_path).exists()

    async def test_upload_face_image_wrong_extension(
        self,
        client: AsyncClient,
        auth_headers: dict,
        upload_dir: Path,
    ):
        """
        Given: A .txt upload
        When: PUT
        Then: Returns 400 naming face_image and nothing is written
        """
        person = await _create_person(client, auth_headers)

        response = await client.put(
            f"{PEOPLE_URL}/{person['id']}/face-image",
            files={"face_image": ("notes.txt", b"hello", "text/plain")},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["details"]["field"] == "face_image"
        assert not any(upload_dir.rglob("*.*"))

    async def test_upload_face_image_unknown_person(
        self,
        client: AsyncClient,
        auth_headers: dict,
        upload_dir: Path,
        make_uuid,
    ):
        """
        Given: A random person id
        When: PUT an image
        Then: Returns 404
        """
        response = await client.put(
            f"{PEOPLE_URL}/{make_uuid()}/face-image",
            files={"face_image": ("face.jpg", JPEG_BYTES, "image/jpeg")},
            headers=auth_headers,
        )

        assert response.status_code == 404

    async def test_remove_face_image(
        self,
        client: AsyncClient,
        auth_headers: dict,
        upload_dir: Path,
    ):
        """
        Given: A person with a stored face image
        When: DELETE the face image
        Then: The path is cleared and the file is removed
        """
        person = await _create_person(client, auth_headers)
        url = f"{PEOPLE_URL}/{person['id']}/face-image"
        uploaded = await client.put(
            url,
            files={"face_image": ("face.jpg", JPEG_BYTES, "image/jpeg")},
            headers=auth_headers,
        )
        stored_path = uploaded.json()["face_image_path"]

        response = await client.delete(url, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["face_image_path"] is None
        assert not (upload_dir / stored_path).exists()
