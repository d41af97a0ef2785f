"""
Access Control Rule API Integration Tests

Endpoints Tested:
    - GET    /api/v1/access-control-rules          - List rules
    - POST   /api/v1/access-control-rules          - Create rule
    - GET    /api/v1/access-control-rules/{id}     - Get rule
    - PUT    /api/v1/access-control-rules/{id}     - Replace rule
    - PATCH  /api/v1/access-control-rules/{id}     - Partially update rule
    - DELETE /api/v1/access-control-rules/{id}     - Delete rule

Authorization Rules:
    - Every endpoint requires the rule permission
"""

from httpx import AsyncClient

# pylint: disable=unused-argument

RULES_URL = "/api/v1/access-control-rules"


def _group_ids(rule: dict) -> set[str]:
    return {group["id"] for group in rule["groups"]}


# =============================================================================
# CREATE RULE TESTS
# =============================================================================


class TestCreateRule:
    """
    Tests for POST /api/v1/access-control-rules endpoint.

    Request Body:
        - name (str, required): Unique rule name
        - group_ids (list[str], optional): Linked groups; omitted means none
    """

    # -------------------------------------------------------------------------
    # Success Cases
    # -------------------------------------------------------------------------

    async def test_create_rule_with_groups(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_groups,
    ):
        """
        Given: Two live groups
        When: POST a rule linking both
        Then: Returns 201 with both groups by id and name
        """
        response = await client.post(
            RULES_URL,
            json={"name": "R1", "group_ids": [g["id"] for g in test_groups]},
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "R1"
        assert _group_ids(data) == {g["id"] for g in test_groups}
        assert {g["name"] for g in data["groups"]} == {"Lobby", "Parking"}

    async def test_create_rule_without_groups(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        """
        Given: No group_ids
        When: POST
        Then: The rule has no groups
        """
        response = await client.post(RULES_URL, json={"name": "Empty"}, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["groups"] == []

    # -------------------------------------------------------------------------
    # Validation Errors
    # -------------------------------------------------------------------------

    async def test_create_rule_duplicate_name_writes_nothing(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_rule,
        test_groups,
    ):
        """
        Given: A live rule named "Office Hours"
        When: POST another rule with that name and some groups
        Then: Returns 409 and only the original rule exists
        """
        response = await client.post(
            RULES_URL,
            json={"name": "Office Hours", "group_ids": [test_groups[0]["id"]]},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["details"]["field"] == "name"

        listing = await client.get(RULES_URL, headers=auth_headers)
        assert listing.json()["pagination"]["total"] == 1
        assert listing.json()["data"][0]["groups"] == []

    async def test_create_rule_unknown_group(
        self,
        client: AsyncClient,
        auth_headers: dict,
        make_uuid,
    ):
        """
        Given: A group id that does not exist
        When: POST
        Then: Returns 404 naming group_ids
        """
        response = await client.post(
            RULES_URL,
            json={"name": "Ghost", "group_ids": [make_uuid()]},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["error"]["details"]["field"] == "group_ids"

    # -------------------------------------------------------------------------
    # Authorization
    # -------------------------------------------------------------------------

    async def test_create_rule_without_rule_permission(
        self,
        client: AsyncClient,
        limited_headers: dict,
    ):
        """
        Given: A user without the rule permission
        When: POST
        Then: Returns 403
        """
        response = await client.post(
            RULES_URL, json={"name": "Forbidden"}, headers=limited_headers
        )

        assert response.status_code == 403


# =============================================================================
# READ RULE TESTS
# =============================================================================


class TestGetRule:
    """Tests for GET /api/v1/access-control-rules and /{id} endpoints."""

    async def test_get_rule(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_rule,
    ):
        """
        Given: An existing rule
        When: GET by id
        Then: Returns 200 with the rule
        """
        response = await client.get(f"{RULES_URL}/{test_rule['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Office Hours"

    async def test_list_rules_filter_by_name(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_rule,
    ):
        """
        Given: A rule named "Office Hours"
        When: GET list with name=office and name=night
        Then: The first filter matches, the second does not
        """
        match = await client.get(RULES_URL, params={"name": "office"}, headers=auth_headers)
        miss = await client.get(RULES_URL, params={"name": "night"}, headers=auth_headers)

        assert match.json()["pagination"]["total"] == 1
        assert miss.json()["pagination"]["total"] == 0

    async def test_get_rule_skips_deleted_group(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_groups,
    ):
        """
        Given: A rule linked to a group that was deleted afterwards
        When: GET the rule
        Then: Only the remaining group is shown
        """
        created = await client.post(
            RULES_URL,
            json={"name": "R2", "group_ids": [g["id"] for g in test_groups]},
            headers=auth_headers,
        )
        await client.delete(
            f"/api/v1/access-control-groups/{test_groups[0]['id']}",
            headers=auth_headers,
        )

        response = await client.get(
            f"{RULES_URL}/{created.json()['id']}", headers=auth_headers
        )

        assert response.status_code == 200
        assert _group_ids(response.json()) == {test_groups[1]["id"]}


# =============================================================================
# UPDATE RULE TESTS
# =============================================================================


class TestUpdateRule:
    """Tests for PUT and PATCH /api/v1/access-control-rules/{id} endpoints."""

    async def test_update_rule_replaces_groups(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_groups,
    ):
        """
        Given: A rule linked to "Lobby"
        When: PUT with only "Parking"
        Then: The rule links exactly "Parking"
        """
        lobby, parking = test_groups
        created = await client.post(
            RULES_URL,
            json={"name": "Swap", "group_ids": [lobby["id"]]},
            headers=auth_headers,
        )
        rule_id = created.json()["id"]

        response = await client.put(
            f"{RULES_URL}/{rule_id}",
            json={"name": "Swap", "group_ids": [parking["id"]]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert _group_ids(response.json()) == {parking["id"]}

    async def test_update_rule_unknown_group_keeps_old_links(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_groups,
        make_uuid,
    ):
        """
        Given: A rule linked to both groups
        When: PUT with one real group and one unknown group
        Then: Returns 404 and the rule still links both groups
        """
        created = await client.post(
            RULES_URL,
            json={"name": "Keep", "group_ids": [g["id"] for g in test_groups]},
            headers=auth_headers,
        )
        rule_id = created.json()["id"]

        response = await client.put(
            f"{RULES_URL}/{rule_id}",
            json={"name": "Keep", "group_ids": [test_groups[0]["id"], make_uuid()]},
            headers=auth_headers,
        )

        assert response.status_code == 404

        fetched = await client.get(f"{RULES_URL}/{rule_id}", headers=auth_headers)
        assert _group_ids(fetched.json()) == {g["id"] for g in test_groups}

    async def test_patch_rule_name_keeps_groups(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_groups,
    ):
        """
        Given: A rule linked to "Lobby"
        When: PATCH only the name
        Then: The link to "Lobby" is kept
        """
        created = await client.post(
            RULES_URL,
            json={"name": "Old Name", "group_ids": [test_groups[0]["id"]]},
            headers=auth_headers,
        )
        rule_id = created.json()["id"]

        response = await client.patch(
            f"{RULES_URL}/{rule_id}", json={"name": "New Name"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["name"] == "New Name"
        assert _group_ids(response.json()) == {test_groups[0]["id"]}

    async def test_patch_rule_empty_group_list_clears_links(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_groups,
    ):
        """
        Given: A rule linked to both groups
        When: PATCH with group_ids []
        Then: The rule has no groups
        """
        created = await client.post(
            RULES_URL,
            json={"name": "Clear", "group_ids": [g["id"] for g in test_groups]},
            headers=auth_headers,
        )

        response = await client.patch(
            f"{RULES_URL}/{created.json()['id']}",
            json={"group_ids": []},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["groups"] == []


# =============================================================================
# DELETE RULE TESTS
# =============================================================================


class TestDeleteRule:
    """Tests for DELETE /api/v1/access-control-rules/{id} endpoint."""

    async def test_delete_rule_keeps_groups(
        self,
        client: AsyncClient,
        auth_headers: dict,
        test_groups,
    ):
        """
        Given: A rule linked to a group
        When: DELETE the rule
        Then: Returns 204; the rule is gone and the group still exists
        """
        created = await client.post(
            RULES_URL,
            json={"name": "Gone", "group_ids": [test_groups[0]["id"]]},
            headers=auth_headers,
        )
        rule_id = created.json()["id"]

        response = await client.delete(f"{RULES_URL}/{rule_id}", headers=auth_headers)

        assert response.status_code == 204
        assert (
            await client.get(f"{RULES_URL}/{rule_id}", headers=auth_headers)
        ).status_code == 404
        assert (
            await client.get(
                f"/api/v1/access-control-groups/{test_groups[0]['id']}",
                headers=auth_headers,
            )
        ).status_code == 200

    async def test_delete_rule_not_found(
        self,
        client: AsyncClient,
        auth_headers: dict,
        make_uuid,
    ):
        """
        Given: A random UUID
        When: DELETE
        Then: Returns 404
        """
        response = await client.delete(f"{RULES_URL}/{make_uuid()}", headers=auth_headers)

        assert response.status_code == 404
