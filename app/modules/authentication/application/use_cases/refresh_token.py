# 📄 File: app/modules/authentication/application/use_cases/refresh_token.py
# 🧭 Purpose (Layman Explanation):
# Gives a logged-in device a new short-lived access token in exchange for its refresh
# token, as long as the device session is still valid.
#
# 🧪 Purpose (Technical Summary):
# RefreshToken use case. The refresh token is shape-checked (TOKEN_NOT_FOUND), resolved
# to its session (SESSION_NOT_FOUND), and the session must be active (SESSION_EXPIRED).
# Issues a new access token and touches the session's last access. The refresh token
# itself is not rotated here; only login rotates it.
#
# 🔗 Dependencies:
# - Domain repositories and services
#
# 🔄 Connected Modules / Calls From:
# - container.py (construction)
# - presentation.api.v1.auth (POST /refresh)

import logging

from app.modules.authentication.application.commands import RefreshTokenCommand
from app.modules.authentication.application.dto import RefreshTokenResult
from app.modules.authentication.application.use_cases.base import UseCase
from app.modules.authentication.domain.repositories import SessionRepository
from app.modules.authentication.domain.services import TokenService
from app.shared.core.exceptions import (
    SessionExpiredError,
    SessionNotFoundError,
    TokenNotFoundError,
)

logger = logging.getLogger(__name__)


class RefreshTokenUseCase(UseCase[RefreshTokenCommand, RefreshTokenResult]):
    failure_code = "REFRESH_FAILED"
    failure_message = "Token refresh failed"

    def __init__(self, session_repository: SessionRepository, token_service: TokenService):
        self.session_repository = session_repository
        self.token_service = token_service

    async def handle(self, command: RefreshTokenCommand) -> RefreshTokenResult:
        refresh_token = command.refresh_token
        if not refresh_token or not self.token_service.verify_refresh_token(refresh_token):
            raise TokenNotFoundError()

        # Inactive sessions are included so a revoked or expired token reports SESSION_EXPIRED
        session = await self.session_repository.find_by_refresh_token(refresh_token, include_inactive=True)
        if session is None:
            raise SessionNotFoundError()

        if not session.is_active():
            logger.info(f"Refresh refused for {session.status.value} session {session.id}")
            raise SessionExpiredError()

        access_token = self.token_service.generate_access_token(session.user_id, session.id)

        session.update_last_access()
        await self.session_repository.update(session)

        return RefreshTokenResult(
            success=True,
            message="Token refreshed successfully",
            access_token=access_token,
            expires_in=self.token_service.access_token_ttl_seconds,
        )
