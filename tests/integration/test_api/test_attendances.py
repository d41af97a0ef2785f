"""
Attendance API Integration Tests

Endpoints Tested:
    - GET    /api/v1/attendances          - List attendance definitions
    - POST   /api/v1/attendances          - Create attendance definition
    - GET    /api/v1/attendances/{id}     - Get attendance definition
    - PUT    /api/v1/attendances/{id}     - Replace attendance definition
    - PATCH  /api/v1/attendances/{id}     - Partially update
    - DELETE /api/v1/attendances/{id}     - Delete

Authorization Rules:
    - Every endpoint requires the time attendance permission
"""

from httpx import AsyncClient

# pylint: disable=unused-argument

ATTENDANCES_URL = "/api/v1/attendances"

GRACE_FIELDS = (
    "early_in_minutes",
    "late_in_minutes",
    "early_out_minutes",
    "late_out_minutes",
)


# =============================================================================
# CREATE ATTENDANCE TESTS
# =============================================================================


class TestCreateAttendance:
    """
    Tests for POST /api/v1/attendances endpoint.

    Request Body:
        - name (str, required): Unique name
        - schedules (list, optional): Working windows with grace offsets;
          omitted means seven full-day windows with zero grace
    """

    # -------------------------------------------------------------------------
    # Success Cases
    # -------------------------------------------------------------------------

    async def test_create_attendance_with_schedules(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: One weekday window with grace offsets
        When: POST
        Then: Returns 201 with the window and its offsets
        """
        response = await client.post(
            ATTENDANCES_URL,
            json={
                "name": "Day Shift",
                "schedules": [
                    {
                        "day_of_week": 1,
                        "start_time": "09:00:00",
                        "end_time": "17:00:00",
                        "early_in_minutes": 15,
                        "late_in_minutes": 10,
                        "early_out_minutes": 5,
                        "late_out_minutes": 30,
                    }
                ],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        schedule = response.json()["schedules"][0]
        assert schedule["start_time"] == "09:00:00"
        assert schedule["end_time"] == "17:00:00"
        assert schedule["early_in_minutes"] == 15
        assert schedule["late_out_minutes"] == 30

    async def test_create_attendance_window_without_times_uses_working_hours(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A weekday window with no times
        When: POST
        Then: The window is 08:00:00 to 16:00:00
        """
        response = await client.post(
            ATTENDANCES_URL,
            json={"name": "Office", "schedules": [{"day_of_week": 2}]},
            headers=auth_headers,
        )

        assert response.status_code == 201
        schedule = response.json()["schedules"][0]
        assert schedule["start_time"] == "08:00:00"
        assert schedule["end_time"] == "16:00:00"

    # -------------------------------------------------------------------------
    # Defaults
    # -------------------------------------------------------------------------

    async def test_create_attendance_omitted_schedules_default_to_full_week(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: No schedules field
        When: POST
        Then: Seven full-day windows with every grace offset at zero
        """
        response = await client.post(
            ATTENDANCES_URL, json={"name": "Flexible"}, headers=auth_headers
        )

        assert response.status_code == 201
        schedules = response.json()["schedules"]
        assert len(schedules) == 7
        assert {s["day_of_week"] for s in schedules} == set(range(1, 8))
        for schedule in schedules:
            assert schedule["start_time"] == "00:00:00"
            assert schedule["end_time"] == "23:59:59"
            for field in GRACE_FIELDS:
                assert schedule[field] == 0

    async def test_create_attendance_empty_schedules(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: schedules is []
        When: POST
        Then: No windows are stored
        """
        response = await client.post(
            ATTENDANCES_URL,
            json={"name": "Unscheduled", "schedules": []},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["schedules"] == []

    # -------------------------------------------------------------------------
    # Validation Errors
    # -------------------------------------------------------------------------

    async def test_create_attendance_negative_grace(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A window with a negative grace offset
        When: POST
        Then: Returns 400
        """
        response = await client.post(
            ATTENDANCES_URL,
            json={
                "name": "Negative",
                "schedules": [{"day_of_week": 1, "late_in_minutes": -5}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 400

    async def test_create_attendance_duplicate_name(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_attendance,
    ):
        """
        Given: A live definition named "Standard Shift"
        When: POST the same name
        Then: Returns 409
        """
        response = await client.post(
            ATTENDANCES_URL, json={"name": "Standard Shift"}, headers=auth_headers
        )

        assert response.status_code == 409

    # -------------------------------------------------------------------------
    # Authorization
    # -------------------------------------------------------------------------

    async def test_create_attendance_without_permission(
        self,
        client: AsyncClient,
        limited_headers: dict,
    ):
        """
        Given: A user without the time attendance permission
        When: POST
        Then: Returns 403
        """
        response = await client.post(
            ATTENDANCES_URL, json={"name": "Forbidden"}, headers=limited_headers
        )

        assert response.status_code == 403


# =============================================================================
# UPDATE ATTENDANCE TESTS
# =============================================================================


class TestUpdateAttendance:
    """Tests for PUT and PATCH /api/v1/attendances/{id} endpoints."""

    async def test_update_attendance_replaces_schedules(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A definition with the default full week
        When: PUT with two windows
        Then: Exactly those two windows remain
        """
        created = await client.post(
            ATTENDANCES_URL, json={"name": "Weekly"}, headers=auth_headers
        )
        attendance_id = created.json()["id"]

        response = await client.put(
            f"{ATTENDANCES_URL}/{attendance_id}",
            json={
                "name": "Weekly",
                "schedules": [{"day_of_week": 1}, {"day_of_week": 5}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert sorted(s["day_of_week"] for s in response.json()["schedules"]) == [1, 5]

    async def test_patch_attendance_name_keeps_schedules(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A definition with one window
        When: PATCH only the name
        Then: The window is kept
        """
        created = await client.post(
            ATTENDANCES_URL,
            json={"name": "Night", "schedules": [{"day_of_week": 6}]},
            headers=auth_headers,
        )

        response = await client.patch(
            f"{ATTENDANCES_URL}/{created.json()['id']}",
            json={"name": "Night Shift"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Night Shift"
        assert [s["day_of_week"] for s in response.json()["schedules"]] == [6]

    async def test_update_attendance_not_found(
        self,
        client: AsyncClient,
        auth_headers: dict,
        make_uuid,
    ):
        """
        Given: A random UUID
        When: PUT
        Then: Returns 404
        """
        response = await client.put(
            f"{ATTENDANCES_URL}/{make_uuid()}",
            json={"name": "Missing"},
            headers=auth_headers,
        )

        assert response.status_code == 404


# =============================================================================
# READ / DELETE ATTENDANCE TESTS
# =============================================================================


class TestReadDeleteAttendance:
    """Tests for GET and DELETE /api/v1/attendances endpoints."""

    async def test_list_attendances(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_attendance,
    ):
        """
        Given: One definition
        When: GET list
        Then: It is returned
        """
        response = await client.get(ATTENDANCES_URL, headers=auth_headers)

        assert response.status_code == 200
        assert [a["name"] for a in response.json()["data"]] == ["Standard Shift"]

    async def test_delete_attendance(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: A definition with schedules
        When: DELETE
        Then: Returns 204 and GET returns 404
        """
        created = await client.post(
            ATTENDANCES_URL, json={"name": "Temporary"}, headers=auth_headers
        )
        attendance_id = created.json()["id"]

        response = await client.delete(
            f"{ATTENDANCES_URL}/{attendance_id}", headers=auth_headers
        )

        assert response.status_code == 204
        fetched = await client.get(
            f"{ATTENDANCES_URL}/{attendance_id}", headers=auth_headers
        )
        assert fetched.status_code == 404
