"""
Response Assembly Tests

Unit tests for resolving stored references into live rows.
"""

from uuid import UUID, uuid4

from access_control.db.repositories import DeviceRepository
from access_control.engine.assembler import ResponseAssembler
from access_control.models.device import AccessControlDevice


class TestResponseAssembler:
    """Tests for ResponseAssembler.resolve and resolve_one."""

    async def test_resolve_keeps_request_order(self, test_db, test_devices) -> None:
        """Test rows come back in the order of the given ids."""
        ids = [UUID(d["id"]) for d in reversed(test_devices)]

        rows = await ResponseAssembler(test_db).resolve(AccessControlDevice, ids)

        assert [row.id for row in rows] == ids

    async def test_resolve_skips_missing_and_deleted(self, test_db, test_devices) -> None:
        """Test unknown and soft-deleted ids are dropped."""
        first, second, _ = (UUID(d["id"]) for d in test_devices)
        await DeviceRepository(test_db).soft_delete(first)
        await test_db.commit()

        rows = await ResponseAssembler(test_db).resolve(
            AccessControlDevice, [first, uuid4(), second]
        )

        assert [row.id for row in rows] == [second]

    async def test_resolve_one(self, test_db, test_devices) -> None:
        """Test single references resolve or come back as None."""
        assembler = ResponseAssembler(test_db)
        device_id = UUID(test_devices[0]["id"])

        assert (await assembler.resolve_one(AccessControlDevice, device_id)).id == device_id
        assert await assembler.resolve_one(AccessControlDevice, None) is None
        assert await assembler.resolve_one(AccessControlDevice, uuid4()) is None
