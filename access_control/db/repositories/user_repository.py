"""
User Repository

Database operations specific to the User model.

Common Operations:
==================
- get_by_username()  → Find a live user by login name (dashboard login)
- search()           → Inherited; filters on username substring and status

The permission bundle is a child row (UserPermission) and is read and
rewritten through AssociationRepository, never through this class.

Usage Example:
==============
    repo = UserRepository(db)
    user = await repo.get_by_username("admin")
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")
"""

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.db.repositories.base import BaseRepository
from access_control.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    searchable_fields = ("username",)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_by_username(self, username: str) -> User | None:
        """
        Get a live user by username.

        Args:
            username: Exact login name

        Returns:
            User if found and not deleted, None otherwise

        SQL Generated:
            SELECT * FROM users
            WHERE username = 'admin' AND deleted_at IS NULL
        """
        result = await self.session.execute(
            self.live_query().where(User.username == username)
        )
        return result.scalar_one_or_none()
