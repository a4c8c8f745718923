# 📄 File: app/modules/authentication/application/use_cases/maintenance.py
# 🧭 Purpose (Layman Explanation):
# Housekeeping jobs: throw away old sessions and codes nobody can use anymore, unlock
# accounts whose lock time is over, and trim a user back under the device limit.
#
# 🧪 Purpose (Technical Summary):
# Maintenance use cases run on a schedule by Celery beat (see celery_config.py) or
# on demand. Each reports a MaintenanceResult; failures wrap into MAINTENANCE_FAILED.
#
# 🔗 Dependencies:
# - Domain repositories
#
# 🔄 Connected Modules / Calls From:
# - container.py (construction)
# - app.background_jobs.tasks.maintenance

import logging
from typing import Optional

from app.modules.authentication.application.commands import (
    MaintenanceCommand,
    RevokeExcessSessionsCommand,
)
from app.modules.authentication.application.dto import MaintenanceResult
from app.modules.authentication.application.use_cases.base import UseCase
from app.modules.authentication.domain.repositories import (
    SessionRepository,
    UserRepository,
    VerificationCodeRepository,
)
from app.shared.core.exceptions import ConcurrentModificationError
from app.shared.utils.logging import get_logger

logger = logging.getLogger(__name__)
structured_logger = get_logger(__name__)


class CleanupExpiredSessionsUseCase(UseCase[MaintenanceCommand, MaintenanceResult]):
    failure_code = "MAINTENANCE_FAILED"
    failure_message = "Session cleanup failed"

    def __init__(self, session_repository: SessionRepository):
        self.session_repository = session_repository

    async def handle(self, command: Optional[MaintenanceCommand] = None) -> MaintenanceResult:
        deleted = await self.session_repository.delete_expired()
        structured_logger.log_business_event(
            "sessions_cleaned", f"Deleted {deleted} expired or revoked sessions", extra={"deleted": deleted}
        )
        return MaintenanceResult(task="cleanup_expired_sessions", affected=deleted)


class CleanupExpiredVerificationCodesUseCase(UseCase[MaintenanceCommand, MaintenanceResult]):
    failure_code = "MAINTENANCE_FAILED"
    failure_message = "Verification code cleanup failed"

    def __init__(self, verification_code_repository: VerificationCodeRepository):
        self.verification_code_repository = verification_code_repository

    async def handle(self, command: Optional[MaintenanceCommand] = None) -> MaintenanceResult:
        deleted = await self.verification_code_repository.delete_expired()
        structured_logger.log_business_event(
            "codes_cleaned", f"Deleted {deleted} expired or used verification codes", extra={"deleted": deleted}
        )
        return MaintenanceResult(task="cleanup_expired_verification_codes", affected=deleted)


class UnlockExpiredLockoutsUseCase(UseCase[MaintenanceCommand, MaintenanceResult]):
    """
    Clear lockouts whose period has elapsed.

    Users are reset with ``activate()`` so the failure counter restarts from
    zero. A user modified concurrently (e.g. logging in right now) is skipped
    and picked up by the next run.
    """

    failure_code = "MAINTENANCE_FAILED"
    failure_message = "Lockout cleanup failed"

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, command: Optional[MaintenanceCommand] = None) -> MaintenanceResult:
        unlocked = 0
        skipped = 0

        for user in await self.user_repository.find_locked_users_to_unlock():
            user.activate()
            try:
                await self.user_repository.update(user)
                unlocked += 1
            except ConcurrentModificationError:
                skipped += 1
                logger.info(f"Skipped unlocking user {user.id}: modified concurrently")

        structured_logger.log_business_event(
            "lockouts_cleared", f"Unlocked {unlocked} users", extra={"unlocked": unlocked, "skipped": skipped}
        )
        return MaintenanceResult(task="unlock_expired_lockouts", affected=unlocked, skipped=skipped)


class RevokeExcessSessionsUseCase(UseCase[RevokeExcessSessionsCommand, MaintenanceResult]):
    failure_code = "MAINTENANCE_FAILED"
    failure_message = "Session trimming failed"

    def __init__(self, session_repository: SessionRepository, max_concurrent_sessions: int = 4):
        self.session_repository = session_repository
        self.max_concurrent_sessions = max_concurrent_sessions

    async def handle(self, command: RevokeExcessSessionsCommand) -> MaintenanceResult:
        keep = self.max_concurrent_sessions if command.keep_count is None else command.keep_count
        revoked = await self.session_repository.revoke_oldest_sessions(command.user_id, keep)
        if revoked:
            logger.info(f"Revoked {revoked} excess sessions of user {command.user_id}")
        return MaintenanceResult(task="revoke_excess_sessions", affected=revoked)
