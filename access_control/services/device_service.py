"""
Access Control Device Service

Business logic for devices. Devices are leaf entities (soft deleted) that
may point at a controlling server. Group memberships reference devices but
are owned by the group.
"""

from typing import Any, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.config.constants import RESOURCE_DEVICE, RESOURCE_SERVER
from access_control.core.exceptions import NotFoundError
from access_control.core.logging import logger
from access_control.db.repositories import DeviceRepository
from access_control.db.transaction import Transaction
from access_control.engine import (
    ReferenceResolver,
    ResponseAssembler,
    UniquenessValidator,
    parse_identifier,
)
from access_control.models.device import AccessControlDevice
from access_control.models.server import AccessControlServer
from access_control.schemas.device import (
    DeviceCreate,
    DevicePatch,
    DeviceResponse,
    DeviceUpdate,
)
from access_control.schemas.server import ServerInfo

SERVER_REFERENCE = ReferenceResolver(
    AccessControlServer, RESOURCE_SERVER, field="access_control_server_id"
)


def _column_values(data: DeviceCreate | DevicePatch) -> dict[str, Any]:
    values = data.model_dump(exclude={"status", "access_control_server_id"})
    values["status"] = data.status.value if data.status else None
    values["access_control_server_id"] = (
        parse_identifier(data.access_control_server_id, "access_control_server_id")
        if data.access_control_server_id
        else None
    )
    return values


class DeviceService:
    """Service for access control device operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = DeviceRepository(session)
        self.assembler = ResponseAssembler(session)
        self.names = UniquenessValidator(
            session, AccessControlDevice, "name", resource=RESOURCE_DEVICE
        )
        self.hosts = UniquenessValidator(
            session, AccessControlDevice, "host_address", resource=RESOURCE_DEVICE
        )

    async def _check(
        self, values: dict[str, Any], exclude_id: Optional[UUID] = None
    ) -> None:
        await self.names.ensure_unique(values.get("name"), exclude_id=exclude_id)
        await self.hosts.ensure_unique(values.get("host_address"), exclude_id=exclude_id)
        await SERVER_REFERENCE.ensure_one(
            self.session, values.get("access_control_server_id")
        )

    async def create_device(self, data: DeviceCreate) -> DeviceResponse:
        """Create a device.

        Raises:
            ValidationError: Malformed server id
            DuplicateError: Name or host address used by a live device
            NotFoundError: Server missing or deleted
        """
        values = _column_values(data)

        async with Transaction(self.session) as tx:
            await self._check(values)
            device = await tx.repository(DeviceRepository).create(**values)

        logger.info("Device created", device_id=str(device.id), name=device.name)
        return await self._to_response(device)

    async def get_device(self, device_id: UUID) -> DeviceResponse:
        device = await self.repo.get_live(device_id)
        if not device:
            raise NotFoundError(resource=RESOURCE_DEVICE, resource_id=str(device_id))
        return await self._to_response(device)

    async def list_devices(
        self,
        offset: int = 0,
        limit: int = 100,
        name: Optional[str] = None,
        type: Optional[str] = None,
        host_address: Optional[str] = None,
    ) -> Tuple[list[DeviceResponse], int]:
        contains = {"name": name, "type": type, "host_address": host_address}
        devices = await self.repo.search(offset=offset, limit=limit, contains=contains)
        total = await self.repo.count_search(contains=contains)
        return [await self._to_response(d) for d in devices], total

    async def update_device(self, device_id: UUID, data: DeviceUpdate) -> DeviceResponse:
        """Replace every field of a device; omitted optional fields are cleared."""
        values = _column_values(data)

        async with Transaction(self.session) as tx:
            devices = tx.repository(DeviceRepository)
            if not await devices.get_live(device_id):
                raise NotFoundError(resource=RESOURCE_DEVICE, resource_id=str(device_id))

            await self._check(values, exclude_id=device_id)
            device = await devices.overwrite(device_id, **values)

        logger.info("Device updated", device_id=str(device_id))
        return await self._to_response(device)

    async def partial_update_device(
        self, device_id: UUID, data: DevicePatch
    ) -> DeviceResponse:
        values = _column_values(data)

        async with Transaction(self.session) as tx:
            devices = tx.repository(DeviceRepository)
            if not await devices.get_live(device_id):
                raise NotFoundError(resource=RESOURCE_DEVICE, resource_id=str(device_id))

            await self._check(values, exclude_id=device_id)
            device = await devices.update(device_id, **values)

        logger.info("Device patched", device_id=str(device_id))
        return await self._to_response(device)

    async def delete_device(self, device_id: UUID) -> None:
        """Soft delete a device. Group memberships keep pointing at it."""
        async with Transaction(self.session) as tx:
            device = await tx.repository(DeviceRepository).soft_delete(device_id)
            if not device:
                raise NotFoundError(resource=RESOURCE_DEVICE, resource_id=str(device_id))

        logger.info("Device deleted", device_id=str(device_id))

    async def _to_response(self, device: AccessControlDevice) -> DeviceResponse:
        server = await self.assembler.resolve_one(
            AccessControlServer, device.access_control_server_id
        )
        return DeviceResponse(
            id=str(device.id),
            name=device.name,
            type=device.type,
            host_address=device.host_address,
            username=device.username,
            access_control_server=(
                ServerInfo(id=str(server.id), name=server.name, host_address=server.host_address)
                if server
                else None
            ),
            record_scan=device.record_scan,
            record_attendance=device.record_attendance,
            allow_clock_in=device.allow_clock_in,
            allow_clock_out=device.allow_clock_out,
            status=device.status,
            created_at=device.created_at,
            updated_at=device.updated_at,
        )
