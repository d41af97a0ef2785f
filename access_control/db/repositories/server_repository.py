"""
Access Control Server Repository

Data access for access control servers.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.db.repositories.base import BaseRepository
from access_control.models.server import AccessControlServer


class ServerRepository(BaseRepository[AccessControlServer]):
    """Repository for AccessControlServer operations."""

    searchable_fields = ("name", "host_address")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(AccessControlServer, session)
