"""
Access Control Group Service

Business logic for groups and their two child collections:

    AccessControlGroup
        ├── AccessControlGroupDevice   (device memberships)
        └── AccessControlGroupSchedule (access windows)

Create and full update write the group row and both collections in one
transaction. Omitted schedules expand to seven 24-hour windows.
"""

from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.config.constants import RESOURCE_DEVICE, RESOURCE_GROUP
from access_control.core.exceptions import NotFoundError
from access_control.core.logging import logger
from access_control.db.repositories import GroupRepository
from access_control.db.transaction import Transaction
from access_control.engine import (
    AssociationReplacer,
    CascadeDeleter,
    ReferenceResolver,
    ResponseAssembler,
    UniquenessValidator,
    expand_group_defaults,
    parse_identifiers,
)
from access_control.models.device import AccessControlDevice
from access_control.models.group import (
    AccessControlGroup,
    AccessControlGroupDevice,
    AccessControlGroupSchedule,
)
from access_control.schemas.group import (
    DeviceInfo,
    GroupCreate,
    GroupPatch,
    GroupResponse,
    GroupUpdate,
)
from access_control.schemas.schedule import GroupScheduleIn, GroupScheduleResponse

GROUP_DEVICES = AssociationReplacer(
    AccessControlGroupDevice,
    "access_control_group_id",
    reference=ReferenceResolver(
        AccessControlDevice,
        RESOURCE_DEVICE,
        key="access_control_device_id",
        field="device_ids",
    ),
)

GROUP_SCHEDULES = AssociationReplacer(
    AccessControlGroupSchedule,
    "access_control_group_id",
    order_by=("day_of_week", "date", "start_time"),
)


def _device_rows(device_ids: list[UUID]) -> list[dict]:
    return [{"access_control_device_id": device_id} for device_id in device_ids]


def _schedule_rows(schedules: list[GroupScheduleIn]) -> list[dict]:
    return [schedule.to_row() for schedule in schedules]


class GroupService:
    """Service for access control group operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = GroupRepository(session)
        self.names = UniquenessValidator(
            session, AccessControlGroup, "name", resource=RESOURCE_GROUP
        )
        self.assembler = ResponseAssembler(session)
        self.deleter = CascadeDeleter(
            AccessControlGroup, RESOURCE_GROUP, (GROUP_DEVICES, GROUP_SCHEDULES)
        )

    async def create_group(self, data: GroupCreate) -> GroupResponse:
        """Create a group with its devices and schedules.

        Args:
            data: Group creation data; omitted collections get defaults

        Returns:
            Created group response

        Raises:
            ValidationError: Malformed device id
            DuplicateError: Name already used by a live group
            NotFoundError: A device does not exist
        """
        data = expand_group_defaults(data)
        device_ids = parse_identifiers(data.device_ids, "device_ids")

        async with Transaction(self.session) as tx:
            await self.names.ensure_unique(data.name)
            group = await tx.repository(GroupRepository).create(name=data.name)
            await GROUP_DEVICES.replace(tx, group.id, _device_rows(device_ids))
            await GROUP_SCHEDULES.replace(tx, group.id, _schedule_rows(data.schedules))

        logger.info("Group created", group_id=str(group.id), name=group.name)
        return await self._to_response(group)

    async def get_group(self, group_id: UUID) -> GroupResponse:
        """Get a live group by ID.

        Raises:
            NotFoundError: Group missing or deleted
        """
        group = await self.repo.get_live(group_id)
        if not group:
            raise NotFoundError(resource=RESOURCE_GROUP, resource_id=str(group_id))
        return await self._to_response(group)

    async def list_groups(
        self,
        offset: int = 0,
        limit: int = 100,
        name: Optional[str] = None,
    ) -> Tuple[list[GroupResponse], int]:
        """List live groups.

        Returns:
            Tuple of (groups, total_count)
        """
        contains = {"name": name}
        groups = await self.repo.search(offset=offset, limit=limit, contains=contains)
        total = await self.repo.count_search(contains=contains)
        return [await self._to_response(g) for g in groups], total

    async def update_group(self, group_id: UUID, data: GroupUpdate) -> GroupResponse:
        """Replace a group: name, devices and schedules all follow the request.

        Raises:
            NotFoundError: Group or a referenced device missing
            DuplicateError: Name held by another live group
        """
        data = expand_group_defaults(data)
        device_ids = parse_identifiers(data.device_ids, "device_ids")

        async with Transaction(self.session) as tx:
            groups = tx.repository(GroupRepository)
            if not await groups.get_live(group_id):
                raise NotFoundError(resource=RESOURCE_GROUP, resource_id=str(group_id))

            await self.names.ensure_unique(data.name, exclude_id=group_id)
            group = await groups.overwrite(group_id, name=data.name)
            await GROUP_DEVICES.replace(tx, group_id, _device_rows(device_ids))
            await GROUP_SCHEDULES.replace(tx, group_id, _schedule_rows(data.schedules))

        logger.info("Group updated", group_id=str(group_id))
        return await self._to_response(group)

    async def partial_update_group(
        self, group_id: UUID, data: GroupPatch
    ) -> GroupResponse:
        """Merge provided fields; only collections present in the request are replaced."""
        device_ids = (
            parse_identifiers(data.device_ids, "device_ids")
            if data.device_ids is not None
            else None
        )

        async with Transaction(self.session) as tx:
            groups = tx.repository(GroupRepository)
            if not await groups.get_live(group_id):
                raise NotFoundError(resource=RESOURCE_GROUP, resource_id=str(group_id))

            if data.name is not None:
                await self.names.ensure_unique(data.name, exclude_id=group_id)
            group = await groups.update(group_id, name=data.name)

            if device_ids is not None:
                await GROUP_DEVICES.replace(tx, group_id, _device_rows(device_ids))
            if data.schedules is not None:
                await GROUP_SCHEDULES.replace(
                    tx, group_id, _schedule_rows(data.schedules)
                )

        logger.info("Group patched", group_id=str(group_id))
        return await self._to_response(group)

    async def delete_group(self, group_id: UUID) -> None:
        """Hard delete a group with its memberships and schedules.

        Raises:
            NotFoundError: Group missing or already deleted
        """
        async with Transaction(self.session) as tx:
            await self.deleter.delete(tx, group_id)

        logger.info("Group deleted", group_id=str(group_id))

    async def _to_response(self, group: AccessControlGroup) -> GroupResponse:
        links = await GROUP_DEVICES.list_for(self.session, group.id)
        devices = await self.assembler.resolve(
            AccessControlDevice, [link.access_control_device_id for link in links]
        )
        schedules = await GROUP_SCHEDULES.list_for(self.session, group.id)

        return GroupResponse(
            id=str(group.id),
            name=group.name,
            devices=[
                DeviceInfo(id=str(d.id), name=d.name, host_address=d.host_address)
                for d in devices
            ],
            schedules=[
                GroupScheduleResponse(
                    id=str(s.id),
                    day_of_week=s.day_of_week,
                    date=s.date,
                    start_time=s.start_time,
                    end_time=s.end_time,
                )
                for s in schedules
            ],
            created_at=group.created_at,
            updated_at=group.updated_at,
        )
