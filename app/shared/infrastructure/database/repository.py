# 📄 File: app/shared/infrastructure/database/repository.py
#
# 🧭 Purpose (Layman Explanation):
# Common plumbing for every database-backed repository: open a short transaction, run
# the work, and turn low-level database failures into our own error type.
#
# 🧪 Purpose (Technical Summary):
# Base class for SQLAlchemy repositories. Each repository operation runs in its own
# session and transaction from the injected async_sessionmaker. SQLAlchemyError becomes
# RepositoryError; IntegrityError is re-raised untouched so callers can map constraint
# violations to domain errors.
#
# 🔗 Dependencies:
# - sqlalchemy (async sessions, exceptions)
# - app.shared.core.exceptions (RepositoryError)
#
# 🔄 Connected Modules / Calls From:
# - app/modules/authentication/infrastructure/database/*_repository_impl.py

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.shared.core.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class SQLAlchemyRepository:
    """Transaction helper shared by the SQLAlchemy repositories."""

    entity_name = "Entity"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize the repository.

        Args:
            session_factory: Factory producing async sessions bound to the engine
        """
        self._session_factory = session_factory

    @asynccontextmanager
    async def transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """
        Run a unit of work in one transaction.

        Args:
            operation: Short name used in logs and error details

        Raises:
            IntegrityError: Constraint violations, for the caller to translate
            RepositoryError: Any other database failure
        """
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Database error during {operation} on {self.entity_name}: {str(e)}")
            raise RepositoryError(
                f"Failed to {operation} {self.entity_name}",
                operation=operation,
                entity=self.entity_name,
            ) from e
