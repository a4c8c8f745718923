# 📄 File: app/modules/authentication/application/use_cases/logout.py
# 🧭 Purpose (Layman Explanation):
# Logs out a single device, or every device of a user at once, and lists the devices a
# user is currently logged in on.
#
# 🧪 Purpose (Technical Summary):
# Logout resolves one session by session_id, then refresh_token, then
# (device_id, user_id), and revokes it. LogoutAll bulk-revokes a user's active sessions
# and always succeeds. ListSessions returns the caller's active sessions.
#
# 🔗 Dependencies:
# - Domain repositories
#
# 🔄 Connected Modules / Calls From:
# - container.py (construction)
# - presentation.api.v1.auth (POST /logout, POST /logout-all, GET /sessions)

from typing import Optional

from app.modules.authentication.application.commands import (
    ListSessionsCommand,
    LogoutAllCommand,
    LogoutCommand,
)
from app.modules.authentication.application.dto import (
    ListSessionsResult,
    LogoutAllResult,
    LogoutResult,
    SessionDTO,
)
from app.modules.authentication.application.use_cases.base import UseCase
from app.modules.authentication.domain.models import Session
from app.modules.authentication.domain.repositories import SessionRepository
from app.shared.core.exceptions import SessionNotFoundError
from app.shared.utils.logging import get_logger

security_logger = get_logger(__name__).security


class LogoutUseCase(UseCase[LogoutCommand, LogoutResult]):
    failure_code = "LOGOUT_FAILED"
    failure_message = "Logout failed"

    def __init__(self, session_repository: SessionRepository):
        self.session_repository = session_repository

    async def handle(self, command: LogoutCommand) -> LogoutResult:
        session = await self._resolve_session(command)
        if session is None:
            raise SessionNotFoundError()

        # Callers acting for a user may only revoke that user's sessions
        if command.user_id and session.user_id != command.user_id:
            raise SessionNotFoundError()

        session.revoke()
        await self.session_repository.update(session)

        security_logger.log_session_event("revoked", session.user_id, session.id, session.device_id)

        return LogoutResult(success=True, message="Logout successful", session_id=session.id)

    async def _resolve_session(self, command: LogoutCommand) -> Optional[Session]:
        if command.session_id:
            return await self.session_repository.find_by_id(command.session_id)
        if command.refresh_token:
            return await self.session_repository.find_by_refresh_token(command.refresh_token)
        if command.device_id and command.user_id:
            return await self.session_repository.find_by_user_id_and_device_id(
                command.user_id, command.device_id
            )
        return None


class LogoutAllUseCase(UseCase[LogoutAllCommand, LogoutAllResult]):
    failure_code = "LOGOUT_ALL_FAILED"
    failure_message = "Logout from all devices failed"

    def __init__(self, session_repository: SessionRepository):
        self.session_repository = session_repository

    async def handle(self, command: LogoutAllCommand) -> LogoutAllResult:
        revoked = await self.session_repository.revoke_all_by_user_id(command.user_id)

        security_logger.log_session_event("revoked_all", command.user_id, extra={"revoked_count": revoked})

        return LogoutAllResult(
            success=True,
            message="Logged out from all devices",
            revoked_count=revoked,
        )


class ListSessionsUseCase(UseCase[ListSessionsCommand, ListSessionsResult]):
    failure_code = "LIST_SESSIONS_FAILED"
    failure_message = "Could not list sessions"

    def __init__(self, session_repository: SessionRepository, max_concurrent_sessions: int = 4):
        self.session_repository = session_repository
        self.max_concurrent_sessions = max_concurrent_sessions

    async def handle(self, command: ListSessionsCommand) -> ListSessionsResult:
        sessions = await self.session_repository.find_active_by_user_id(command.user_id)
        return ListSessionsResult(
            sessions=[SessionDTO.from_domain(s, command.current_session_id) for s in sessions],
            max_sessions=self.max_concurrent_sessions,
        )
