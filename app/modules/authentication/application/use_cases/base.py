# 📄 File: app/modules/authentication/application/use_cases/base.py
# 🧭 Purpose (Layman Explanation):
# Common wrapper for every action so that unexpected failures become a clean,
# predictable error instead of leaking internal details.
# 🧪 Purpose (Technical Summary):
# Abstract use case with a single ``execute(command)`` entry point. Typed domain errors
# propagate unchanged; infrastructure errors and unexpected exceptions are logged and
# rewrapped into the use case's own 500 error code. Also hosts the best-effort
# notification helper used after state changes are committed.
# 🔗 Dependencies:
# abc, typing, app.shared.core.exceptions, app.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# All use cases in this package

import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Generic, TypeVar

from app.shared.core.exceptions import (
    DomainError,
    EmailDeliveryError,
    RepositoryError,
    UseCaseFailedError,
)

logger = logging.getLogger(__name__)

CommandT = TypeVar("CommandT")
ResultT = TypeVar("ResultT")

# Typed, but internal: callers get the use case failure code instead
WRAPPED_DOMAIN_ERRORS = (RepositoryError, EmailDeliveryError)


class UseCase(ABC, Generic[CommandT, ResultT]):
    """
    Base class for application use cases.

    Subclasses set ``failure_code``/``failure_message`` and implement
    ``handle``. Callers only ever use ``execute``.
    """

    failure_code: str = "INTERNAL_ERROR"
    failure_message: str = "Operation failed"

    async def execute(self, command: CommandT) -> ResultT:
        try:
            return await self.handle(command)
        except WRAPPED_DOMAIN_ERRORS as e:
            logger.error(f"{self.__class__.__name__} failed in infrastructure: {e.message}")
            raise UseCaseFailedError(self.failure_code, self.failure_message, e) from e
        except DomainError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in {self.__class__.__name__}: {str(e)}", exc_info=True)
            raise UseCaseFailedError(self.failure_code, self.failure_message, e) from e

    @abstractmethod
    async def handle(self, command: CommandT) -> ResultT:
        pass


async def notify_best_effort(description: str, notification: Awaitable[None]) -> bool:
    """
    Await a notification whose failure must not change the outcome.

    Used for emails sent after the state change is already persisted.

    Returns:
        bool: True if the notification was handed off
    """
    try:
        await notification
        return True
    except Exception as e:
        logger.warning(f"Notification '{description}' failed: {e}")
        return False
