# 📄 File: app/modules/authentication/application/use_cases/verify_user.py
# 🧭 Purpose (Layman Explanation):
# Confirms a new account with the emailed 5-digit code. Every try counts, so a code can
# only be guessed a few times before it stops working.
#
# 🧪 Purpose (Technical Summary):
# VerifyUser use case keyed by the code alone. The attempt counter is incremented and
# persisted before the expiry/validity checks so the attempt cap holds even when the
# check fails. On success the code is consumed, the user activated, the remaining codes
# for the email revoked and a welcome email sent (best-effort).
#
# 🔗 Dependencies:
# - Domain models, repositories and services
#
# 🔄 Connected Modules / Calls From:
# - container.py (construction)
# - presentation.api.v1.auth (POST /verify)

import logging

from app.modules.authentication.application.commands import VerifyUserCommand
from app.modules.authentication.application.dto import VerifyUserResult
from app.modules.authentication.application.use_cases.base import UseCase, notify_best_effort
from app.modules.authentication.domain.repositories import (
    UserRepository,
    VerificationCodeRepository,
)
from app.modules.authentication.domain.services import EmailService
from app.shared.core.exceptions import (
    InvalidVerificationCodeError,
    UserNotFoundError,
    VerificationCodeExpiredError,
    VerificationCodeNotFoundError,
)
from app.shared.utils.logging import get_logger

logger = logging.getLogger(__name__)
security_logger = get_logger(__name__).security


class VerifyUserUseCase(UseCase[VerifyUserCommand, VerifyUserResult]):
    failure_code = "VERIFICATION_FAILED"
    failure_message = "User verification failed"

    def __init__(
        self,
        user_repository: UserRepository,
        verification_code_repository: VerificationCodeRepository,
        email_service: EmailService,
    ):
        self.user_repository = user_repository
        self.verification_code_repository = verification_code_repository
        self.email_service = email_service

    async def handle(self, command: VerifyUserCommand) -> VerifyUserResult:
        code = command.code.strip()
        verification_code = await self.verification_code_repository.find_by_code(code)
        if verification_code is None:
            raise VerificationCodeNotFoundError()

        # Counted and stored before any check, so failed checks still use up attempts
        verification_code.increment_attempts()
        verification_code = await self.verification_code_repository.update(verification_code)

        if verification_code.is_expired():
            security_logger.log_authentication(
                "verify", False, email=verification_code.email.value, reason="code expired"
            )
            raise VerificationCodeExpiredError()

        if not verification_code.is_valid():
            security_logger.log_authentication(
                "verify", False, email=verification_code.email.value, reason="code used or exhausted"
            )
            raise InvalidVerificationCodeError()

        verification_code.use()
        await self.verification_code_repository.update(verification_code)

        user = await self.user_repository.find_by_email(verification_code.email)
        if user is None:
            raise UserNotFoundError(verification_code.email.value)

        user.verify()
        user = await self.user_repository.update(user)

        revoked = await self.verification_code_repository.revoke_all_by_email(verification_code.email)
        logger.debug(f"Revoked {revoked} remaining verification codes for user {user.id}")

        await notify_best_effort(
            "welcome email",
            self.email_service.send_welcome_email(user.email, user.name),
        )

        security_logger.log_authentication("verify", True, user_id=user.id)

        return VerifyUserResult(
            success=True,
            message="Account verified successfully",
            user_id=user.id,
        )
