"""
Access Control Rule Repository

Data access for access control rules.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.db.repositories.base import BaseRepository
from access_control.models.rule import AccessControlRule


class RuleRepository(BaseRepository[AccessControlRule]):
    """Repository for AccessControlRule operations."""

    searchable_fields = ("name",)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(AccessControlRule, session)
