# 📄 File: app/modules/authentication/application/use_cases/login_user.py
# 🧭 Purpose (Layman Explanation):
# Logs a user in from one device. A device that is already logged in just gets fresh
# tokens; a new device gets a new session, unless the user already has the maximum
# number of devices logged in. Too many wrong passwords lock the account for a while.
#
# 🧪 Purpose (Technical Summary):
# LoginUser use case: credential check with failed-login recording, status gating
# (pending 403, locked 423, suspended 403), then device-scoped session binding.
# Same-device login rotates the refresh token and extends the session in place; a new
# device creates a session only below the concurrent-session cap (no eviction).
# A successful login commits the version-checked user update before any session is
# written, so overlapping logins of one user admit a single winner and the loser leaves
# sessions untouched. Failed logins retry the counter update on version conflicts so
# parallel wrong guesses are all counted toward the lockout.
#
# 🔗 Dependencies:
# - Domain models, repositories and services
#
# 🔄 Connected Modules / Calls From:
# - container.py (construction)
# - presentation.api.v1.auth (POST /login)

import logging
from datetime import timedelta

from app.modules.authentication.application.commands import LoginUserCommand
from app.modules.authentication.application.dto import AuthenticatedUserDTO, LoginUserResult
from app.modules.authentication.application.use_cases.base import UseCase, notify_best_effort
from app.modules.authentication.domain.models import (
    DeviceMeta,
    Email,
    Password,
    Session,
    User,
    utc_now,
)
from app.modules.authentication.domain.repositories import SessionRepository, UserRepository
from app.modules.authentication.domain.services import (
    EmailService,
    PasswordService,
    TokenService,
)
from app.shared.core.exceptions import (
    AccountLockedError,
    AccountSuspendedError,
    ConcurrentModificationError,
    InvalidCredentialsError,
    MaxSessionsExceededError,
    UserNotFoundError,
    UserNotVerifiedError,
)
from app.shared.utils.logging import get_logger

logger = logging.getLogger(__name__)
security_logger = get_logger(__name__).security

# Each conflicting round stores at least one competing update
FAILED_LOGIN_UPDATE_RETRIES = 10


class LoginUserUseCase(UseCase[LoginUserCommand, LoginUserResult]):
    """
    Authenticate credentials and bind the login to a device session.

    Steps:
    1. Resolve the user by email
    2. Verify the password; on mismatch record the failure and persist it,
       reloading the user and re-applying it when a concurrent update wins
    3. Reject pending users
    4. Reject locked (423, with notification) and suspended users
    5. Load active sessions and the session for this device; a new device over
       the session cap is rejected
    6. Record the successful login on the user (version-checked)
    7. Same device: rotate the refresh token and extend expiry in place
    8. New device: create a session, notify the user when other sessions are
       already active
    """

    failure_code = "LOGIN_FAILED"
    failure_message = "Login failed"

    def __init__(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository,
        password_service: PasswordService,
        token_service: TokenService,
        email_service: EmailService,
        max_concurrent_sessions: int = 4,
        session_ttl: timedelta = timedelta(days=7),
        max_failed_attempts: int = 5,
        lock_duration: timedelta = timedelta(minutes=30),
    ):
        self.user_repository = user_repository
        self.session_repository = session_repository
        self.password_service = password_service
        self.token_service = token_service
        self.email_service = email_service
        self.max_concurrent_sessions = max_concurrent_sessions
        self.session_ttl = session_ttl
        self.max_failed_attempts = max_failed_attempts
        self.lock_duration = lock_duration

    async def handle(self, command: LoginUserCommand) -> LoginUserResult:
        email = Email.create(command.email)

        user = await self.user_repository.find_by_email(email)
        if user is None:
            security_logger.log_authentication("login", False, email=email.value, reason="unknown email")
            raise UserNotFoundError(email.value)

        if not await self.password_service.verify(command.password, user.hashed_password):
            await self._record_failure(user)
            raise InvalidCredentialsError()

        if user.is_pending_verification():
            raise UserNotVerifiedError()

        if not user.is_active():
            if user.is_locked():
                await notify_best_effort(
                    "account locked notification",
                    self.email_service.send_account_locked_notification(user.email, user.locked_until),
                )
                security_logger.log_authentication("login", False, user_id=user.id, reason="account locked")
                raise AccountLockedError(user.locked_until)
            security_logger.log_authentication("login", False, user_id=user.id, reason=user.status.value)
            raise AccountSuspendedError()

        active_sessions = await self.session_repository.find_active_by_user_id(user.id)
        existing_session = await self.session_repository.find_by_user_id_and_device_id(
            user.id, command.device_id
        )

        if existing_session is None and len(active_sessions) >= self.max_concurrent_sessions:
            security_logger.log_authentication(
                "login", False, user_id=user.id, reason="max sessions reached"
            )
            raise MaxSessionsExceededError(self.max_concurrent_sessions)

        # A concurrent login of the same user fails here, before any session is written
        await self._record_success(user, command.password)

        if existing_session is not None:
            return await self._refresh_device_session(user, existing_session)

        return await self._create_device_session(user, command, has_other_sessions=bool(active_sessions))

    async def _record_failure(self, user: User) -> None:
        """
        Count a failed login, retrying on concurrent updates of the same user.

        Args:
            user: User loaded for this login attempt
        """
        for _ in range(FAILED_LOGIN_UPDATE_RETRIES):
            user.record_failed_login(self.max_failed_attempts, self.lock_duration)
            try:
                await self.user_repository.update(user)
                break
            except ConcurrentModificationError:
                reloaded = await self.user_repository.find_by_id(user.id)
                if reloaded is None:
                    return
                user = reloaded
        else:
            logger.warning(
                f"Failed login of user {user.id} not recorded after "
                f"{FAILED_LOGIN_UPDATE_RETRIES} conflicting updates"
            )

        security_logger.log_authentication(
            "login",
            False,
            user_id=user.id,
            reason=f"invalid password ({user.failed_login_attempts} consecutive)",
        )

    async def _record_success(self, user: User, plain_password: str) -> None:
        if self.password_service.needs_rehash(user.hashed_password):
            user.update_password(await self.password_service.hash(Password(value=plain_password)))
            logger.info(f"Rehashed password of user {user.id} with current parameters")

        user.record_successful_login()
        await self.user_repository.update(user)

    async def _refresh_device_session(self, user: User, session: Session) -> LoginUserResult:
        session.update_refresh_token(
            self.token_service.generate_refresh_token(),
            utc_now() + self.session_ttl,
        )
        session = await self.session_repository.update(session)

        access_token = self.token_service.generate_access_token(user.id, session.id)

        security_logger.log_session_event("rotated", user.id, session.id, session.device_id)
        security_logger.log_authentication("login", True, user_id=user.id)

        return self._result("Session updated", user, session, access_token)

    async def _create_device_session(
        self,
        user: User,
        command: LoginUserCommand,
        has_other_sessions: bool,
    ) -> LoginUserResult:
        meta = command.device_meta
        session = Session.create(
            user_id=user.id,
            device_id=command.device_id,
            device_meta=DeviceMeta(
                user_agent=meta.user_agent,
                ip_address=meta.ip_address,
                platform=meta.platform,
                browser=meta.browser,
                os=meta.os,
            ),
            refresh_token=self.token_service.generate_refresh_token(),
            ttl=self.session_ttl,
        )
        # Storage rejects a second active session for the same device
        session = await self.session_repository.save(session)

        access_token = self.token_service.generate_access_token(user.id, session.id)

        if has_other_sessions:
            await notify_best_effort(
                "new session notification",
                self.email_service.send_new_session_notification(
                    user.email,
                    session.device_meta.describe(),
                    session.device_meta.ip_address,
                ),
            )

        security_logger.log_session_event("created", user.id, session.id, session.device_id)
        security_logger.log_authentication("login", True, user_id=user.id)

        return self._result("Login successful", user, session, access_token)

    def _result(self, message: str, user: User, session: Session, access_token: str) -> LoginUserResult:
        return LoginUserResult(
            success=True,
            message=message,
            access_token=access_token,
            refresh_token=session.refresh_token,
            expires_in=self.token_service.access_token_ttl_seconds,
            session_id=session.id,
            user=AuthenticatedUserDTO.from_domain(user),
        )
