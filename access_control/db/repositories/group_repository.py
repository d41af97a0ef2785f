"""
Access Control Group Repository

Data access for access control group rows. Device memberships and schedules
are child rows handled by AssociationRepository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.db.repositories.base import BaseRepository
from access_control.models.group import AccessControlGroup


class GroupRepository(BaseRepository[AccessControlGroup]):
    """Repository for AccessControlGroup operations."""

    searchable_fields = ("name",)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(AccessControlGroup, session)
