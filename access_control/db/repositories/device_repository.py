"""
Access Control Device Repository

Data access for access control devices.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.db.repositories.base import BaseRepository
from access_control.models.device import AccessControlDevice


class DeviceRepository(BaseRepository[AccessControlDevice]):
    """Repository for AccessControlDevice operations."""

    searchable_fields = ("name", "host_address")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(AccessControlDevice, session)
