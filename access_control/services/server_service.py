"""
Access Control Server Service

Business logic for access control servers. Servers own no child rows and
are soft deleted; a deleted server frees its name and host address.
"""

from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.config.constants import RESOURCE_SERVER
from access_control.core.exceptions import NotFoundError
from access_control.core.logging import logger
from access_control.db.repositories import ServerRepository
from access_control.db.transaction import Transaction
from access_control.engine import UniquenessValidator
from access_control.models.server import AccessControlServer
from access_control.schemas.server import (
    ServerCreate,
    ServerPatch,
    ServerResponse,
    ServerUpdate,
)


class ServerService:
    """Service for access control server operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = ServerRepository(session)
        self.names = UniquenessValidator(
            session, AccessControlServer, "name", resource=RESOURCE_SERVER
        )
        self.hosts = UniquenessValidator(
            session, AccessControlServer, "host_address", resource=RESOURCE_SERVER
        )

    async def _check_unique(
        self,
        name: Optional[str],
        host_address: Optional[str],
        exclude_id: Optional[UUID] = None,
    ) -> None:
        await self.names.ensure_unique(name, exclude_id=exclude_id)
        await self.hosts.ensure_unique(host_address, exclude_id=exclude_id)

    async def create_server(self, data: ServerCreate) -> ServerResponse:
        """Create a server.

        Raises:
            DuplicateError: Name or host address used by a live server
        """
        async with Transaction(self.session) as tx:
            await self._check_unique(data.name, data.host_address)
            server = await tx.repository(ServerRepository).create(
                **data.model_dump(exclude={"status"}),
                status=data.status.value,
            )

        logger.info("Server created", server_id=str(server.id), name=server.name)
        return self._to_response(server)

    async def get_server(self, server_id: UUID) -> ServerResponse:
        server = await self.repo.get_live(server_id)
        if not server:
            raise NotFoundError(resource=RESOURCE_SERVER, resource_id=str(server_id))
        return self._to_response(server)

    async def list_servers(
        self,
        offset: int = 0,
        limit: int = 100,
        name: Optional[str] = None,
        host_address: Optional[str] = None,
    ) -> Tuple[list[ServerResponse], int]:
        contains = {"name": name, "host_address": host_address}
        servers = await self.repo.search(offset=offset, limit=limit, contains=contains)
        total = await self.repo.count_search(contains=contains)
        return [self._to_response(s) for s in servers], total

    async def update_server(self, server_id: UUID, data: ServerUpdate) -> ServerResponse:
        """Replace every field of a server; omitted credentials are cleared."""
        async with Transaction(self.session) as tx:
            servers = tx.repository(ServerRepository)
            if not await servers.get_live(server_id):
                raise NotFoundError(resource=RESOURCE_SERVER, resource_id=str(server_id))

            await self._check_unique(data.name, data.host_address, exclude_id=server_id)
            server = await servers.overwrite(
                server_id,
                **data.model_dump(exclude={"status"}),
                status=data.status.value,
            )

        logger.info("Server updated", server_id=str(server_id))
        return self._to_response(server)

    async def partial_update_server(
        self, server_id: UUID, data: ServerPatch
    ) -> ServerResponse:
        async with Transaction(self.session) as tx:
            servers = tx.repository(ServerRepository)
            if not await servers.get_live(server_id):
                raise NotFoundError(resource=RESOURCE_SERVER, resource_id=str(server_id))

            await self._check_unique(data.name, data.host_address, exclude_id=server_id)
            server = await servers.update(
                server_id,
                **data.model_dump(exclude={"status"}),
                status=data.status.value if data.status else None,
            )

        logger.info("Server patched", server_id=str(server_id))
        return self._to_response(server)

    async def delete_server(self, server_id: UUID) -> None:
        """Soft delete a server. Devices pointing at it keep the reference."""
        async with Transaction(self.session) as tx:
            server = await tx.repository(ServerRepository).soft_delete(server_id)
            if not server:
                raise NotFoundError(resource=RESOURCE_SERVER, resource_id=str(server_id))

        logger.info("Server deleted", server_id=str(server_id))

    def _to_response(self, server: AccessControlServer) -> ServerResponse:
        return ServerResponse(
            id=str(server.id),
            name=server.name,
            host_address=server.host_address,
            username=server.username,
            status=server.status,
            last_sync_at=server.last_sync_at,
            created_at=server.created_at,
            updated_at=server.updated_at,
        )
