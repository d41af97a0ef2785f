"""
Uniqueness Validation Tests

Unit tests for duplicate checks against live rows.
"""

from uuid import UUID

import pytest

from access_control.core.exceptions import DuplicateError
from access_control.db.repositories import PersonRepository, ServerRepository
from access_control.engine.uniqueness import UniquenessValidator
from access_control.models.person import PersonCard
from access_control.models.server import AccessControlServer


class TestUniquenessValidator:
    """Tests for UniquenessValidator."""

    async def test_detects_existing_value(self, test_db, test_server) -> None:
        """Test a value held by a live row is a duplicate."""
        validator = UniquenessValidator(
            test_db, AccessControlServer, "name", resource="Access control server"
        )

        with pytest.raises(DuplicateError) as exc_info:
            await validator.ensure_unique("HQ Controller")

        assert exc_info.value.field == "name"
        assert exc_info.value.status_code == 409

    async def test_excludes_own_row(self, test_db, test_server) -> None:
        """Test a record does not conflict with itself."""
        validator = UniquenessValidator(
            test_db, AccessControlServer, "name", resource="Access control server"
        )

        await validator.ensure_unique("HQ Controller", exclude_id=UUID(test_server["id"]))

    async def test_ignores_soft_deleted_rows(self, test_db, test_server) -> None:
        """Test a soft-deleted row frees its value."""
        await ServerRepository(test_db).soft_delete(UUID(test_server["id"]))
        await test_db.commit()
        validator = UniquenessValidator(
            test_db, AccessControlServer, "name", resource="Access control server"
        )

        assert await validator.exists("HQ Controller") is False

    async def test_none_is_never_duplicate(self, test_db, test_server) -> None:
        """Test None values are skipped."""
        validator = UniquenessValidator(
            test_db, AccessControlServer, "name", resource="Access control server"
        )

        await validator.ensure_unique(None)

    async def test_child_rows_excluded_by_owner(self, test_db) -> None:
        """Test child-table checks ignore every row of the excluded parent."""
        person = await PersonRepository(test_db).create(
            first_name="Ada", last_name="Lovelace", person_type="employee"
        )
        test_db.add(PersonCard(person_id=person.id, card_number="C-1"))
        await test_db.commit()
        person_id = person.id

        cards = UniquenessValidator(
            test_db,
            PersonCard,
            "card_number",
            resource="Person card",
            owner_column="person_id",
        )

        await cards.ensure_all_unique(["C-1", "C-2"], exclude_id=person_id)
        with pytest.raises(DuplicateError):
            await cards.ensure_all_unique(["C-2", "C-1"])
