"""
User Service

Business logic for dashboard users and their permission bundle:

    User
        └── UserPermission (exactly one row, seven capability flags)

The bundle is written with the same replace discipline as other child
collections: the old row is deleted and a new one inserted. PATCH merges
the flags that were sent into the stored ones before replacing.
"""

from typing import Any, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.config.constants import RESOURCE_USER
from access_control.core.exceptions import UserNotFoundError
from access_control.core.logging import logger
from access_control.core.security import hash_password
from access_control.db.repositories import UserRepository
from access_control.db.transaction import Transaction
from access_control.engine import AssociationReplacer, CascadeDeleter, UniquenessValidator
from access_control.models.user import User, UserPermission
from access_control.schemas.user import (
    PermissionIn,
    PermissionResponse,
    UserCreate,
    UserPatch,
    UserResponse,
    UserUpdate,
)

USER_PERMISSION = AssociationReplacer(UserPermission, "user_id")

PERMISSION_FLAGS = tuple(PermissionIn.model_fields)


class UserService:
    """Service for user operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)
        self.usernames = UniquenessValidator(
            session, User, "username", resource=RESOURCE_USER
        )
        self.deleter = CascadeDeleter(User, RESOURCE_USER, (USER_PERMISSION,))

    async def create_user(self, data: UserCreate) -> UserResponse:
        """Create a user with their permission bundle.

        Raises:
            DuplicateError: Username already used by a live user
        """
        async with Transaction(self.session) as tx:
            await self.usernames.ensure_unique(data.username)
            user = await tx.repository(UserRepository).create(
                username=data.username,
                password_hash=hash_password(data.password),
                status=data.status.value,
            )
            await USER_PERMISSION.replace(tx, user.id, [data.permission.model_dump()])

        logger.info("User created", user_id=str(user.id), username=user.username)
        return await self._to_response(user)

    async def get_user(self, user_id: UUID) -> UserResponse:
        user = await self.repo.get_live(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return await self._to_response(user)

    async def get_permission(self, user_id: UUID) -> Optional[UserPermission]:
        """Stored permission bundle of a user, if any."""
        rows = await USER_PERMISSION.list_for(self.session, user_id)
        return rows[0] if rows else None

    async def list_users(
        self,
        offset: int = 0,
        limit: int = 100,
        username: Optional[str] = None,
    ) -> Tuple[list[UserResponse], int]:
        contains = {"username": username}
        users = await self.repo.search(offset=offset, limit=limit, contains=contains)
        total = await self.repo.count_search(contains=contains)
        return [await self._to_response(u) for u in users], total

    async def update_user(self, user_id: UUID, data: UserUpdate) -> UserResponse:
        """Replace username, status and the full permission bundle.

        The password changes only when one is sent.
        """
        values: dict[str, Any] = {
            "username": data.username,
            "status": data.status.value,
        }
        if data.password:
            values["password_hash"] = hash_password(data.password)

        async with Transaction(self.session) as tx:
            users = tx.repository(UserRepository)
            if not await users.get_live(user_id):
                raise UserNotFoundError(str(user_id))

            await self.usernames.ensure_unique(data.username, exclude_id=user_id)
            user = await users.overwrite(user_id, **values)
            await USER_PERMISSION.replace(tx, user_id, [data.permission.model_dump()])

        logger.info("User updated", user_id=str(user_id))
        return await self._to_response(user)

    async def partial_update_user(self, user_id: UUID, data: UserPatch) -> UserResponse:
        """Merge provided fields and permission flags."""
        async with Transaction(self.session) as tx:
            users = tx.repository(UserRepository)
            if not await users.get_live(user_id):
                raise UserNotFoundError(str(user_id))

            if data.username is not None:
                await self.usernames.ensure_unique(data.username, exclude_id=user_id)
            user = await users.update(
                user_id,
                username=data.username,
                status=data.status.value if data.status else None,
                password_hash=hash_password(data.password) if data.password else None,
            )

            if data.permission is not None:
                current = await self.get_permission(user_id)
                flags = {
                    flag: bool(getattr(current, flag)) if current else False
                    for flag in PERMISSION_FLAGS
                }
                flags.update(data.permission.model_dump(exclude_none=True))
                await USER_PERMISSION.replace(tx, user_id, [flags])

        logger.info("User patched", user_id=str(user_id))
        return await self._to_response(user)

    async def delete_user(self, user_id: UUID) -> None:
        async with Transaction(self.session) as tx:
            await self.deleter.delete(tx, user_id)

        logger.info("User deleted", user_id=str(user_id))

    async def _to_response(self, user: User) -> UserResponse:
        permission = await self.get_permission(user.id)
        return UserResponse(
            id=str(user.id),
            username=user.username,
            status=user.status,
            permission=(
                PermissionResponse(
                    id=str(permission.id),
                    **{flag: getattr(permission, flag) for flag in PERMISSION_FLAGS},
                )
                if permission
                else None
            ),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
