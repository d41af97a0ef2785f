"""
Person Repository

Data access for enrolled people.

Search matches first_name, last_name, company and department as
case-insensitive substrings; person_type is an exact filter passed via
search(equals=...).
"""

from sqlalchemy.ext.asyncio import AsyncSession

from access_control.db.repositories.base import BaseRepository
from access_control.models.person import Person


class PersonRepository(BaseRepository[Person]):
    """Repository for Person operations."""

    searchable_fields = ("first_name", "last_name", "company", "department")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Person, session)
