"""
Transaction Handle

Every multi-table write (a parent row plus its child collections) runs inside
exactly one Transaction. The handle is created once per top-level operation
and passed explicitly to every participating call:

    async with Transaction(session) as tx:
        groups = tx.repository(GroupRepository)
        group = await groups.create(name="Lobby")
        await device_links.replace(tx, group.id, specs)
        await schedules.replace(tx, group.id, schedule_specs)
    # committed here; any exception above rolled everything back

Outcome on exit:
- no exception: COMMIT (a failing commit is rolled back and raised as TransactionError)
- application exception (ValidationError, NotFoundError, ...): ROLLBACK, re-raised as is
- SQLAlchemyError: ROLLBACK, raised as an opaque TransactionError
"""

from types import TracebackType
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from access_control.core.exceptions import TransactionError
from access_control.core.logging import logger

RepositoryT = TypeVar("RepositoryT")


class Transaction:
    """Explicit unit of work bound to one session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def repository(self, repository_class: type[RepositoryT]) -> RepositoryT:
        """Bind a repository to this transaction."""
        return repository_class(self.session)

    async def __aenter__(self) -> "Transaction":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc is None:
            try:
                await self.session.commit()
            except SQLAlchemyError as e:
                await self.session.rollback()
                logger.error(
                    "Transaction commit failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise TransactionError(original_error=e) from e
            return False

        await self.session.rollback()

        if isinstance(exc, SQLAlchemyError):
            logger.error(
                "Transaction rolled back",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise TransactionError(original_error=exc) from exc

        logger.debug("Transaction rolled back", reason=type(exc).__name__)
        return False
