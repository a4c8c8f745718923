# 📄 File: app/modules/authentication/container.py
# 🧭 Purpose (Layman Explanation):
# The place where all the parts of the authentication service are put together: it
# reads the settings, picks the storage and email backends, and builds every use case
# with the pieces it needs.
#
# 🧪 Purpose (Technical Summary):
# Composition root. build_container(settings) wires repositories (memory or SQLAlchemy),
# the argon2 PasswordService, the JWT TokenService and an EmailService backend into one
# AuthContainer holding an instance of every use case. The container owns the lifecycle
# of the database engine and the email HTTP client.
#
# 🔗 Dependencies:
# - app.shared.config.settings (Settings)
# - app.shared.infrastructure.database.connection (DatabaseConnectionManager)
# - Infrastructure adapters and application use cases of this module
#
# 🔄 Connected Modules / Calls From:
# - app/main.py (lifespan)
# - app/background_jobs/tasks/maintenance.py (Celery tasks)
# - tests/conftest.py

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from app.modules.authentication.application.use_cases import (
    CleanupExpiredSessionsUseCase,
    CleanupExpiredVerificationCodesUseCase,
    ListSessionsUseCase,
    LoginUserUseCase,
    LogoutAllUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterUserUseCase,
    RevokeExcessSessionsUseCase,
    UnlockExpiredLockoutsUseCase,
    VerifyUserUseCase,
)
from app.modules.authentication.domain.models import PasswordPolicy
from app.modules.authentication.domain.repositories import (
    SessionRepository,
    UserRepository,
    VerificationCodeRepository,
)
from app.modules.authentication.domain.services import (
    EmailService,
    PasswordService,
    TokenService,
)
from app.modules.authentication.infrastructure.database import (
    SessionRepositoryImpl,
    UserRepositoryImpl,
    VerificationCodeRepositoryImpl,
)
from app.modules.authentication.infrastructure.email import (
    LoggingEmailService,
    SendGridEmailService,
)
from app.modules.authentication.infrastructure.memory import (
    InMemorySessionRepository,
    InMemoryUserRepository,
    InMemoryVerificationCodeRepository,
)
from app.modules.authentication.infrastructure.security import (
    Argon2PasswordService,
    JWTTokenService,
)
from app.shared.config.settings import Settings
from app.shared.infrastructure.database.connection import DatabaseConnectionManager

logger = logging.getLogger(__name__)


@dataclass
class AuthContainer:
    """Everything the authentication module needs at runtime."""

    settings: Settings
    user_repository: UserRepository
    session_repository: SessionRepository
    verification_code_repository: VerificationCodeRepository
    password_service: PasswordService
    token_service: TokenService
    email_service: EmailService

    register_user: RegisterUserUseCase
    verify_user: VerifyUserUseCase
    login_user: LoginUserUseCase
    refresh_token: RefreshTokenUseCase
    logout: LogoutUseCase
    logout_all: LogoutAllUseCase
    list_sessions: ListSessionsUseCase

    cleanup_expired_sessions: CleanupExpiredSessionsUseCase
    cleanup_expired_verification_codes: CleanupExpiredVerificationCodesUseCase
    unlock_expired_lockouts: UnlockExpiredLockoutsUseCase
    revoke_excess_sessions: RevokeExcessSessionsUseCase

    database: Optional[DatabaseConnectionManager] = None

    async def startup(self) -> None:
        """Prepare backing services (schema creation for the database backend)."""
        if self.database is not None:
            await self.database.create_tables()
        if not await self.email_service.verify_configuration():
            logger.warning("Email backend configuration check failed; notifications may not be delivered")
        logger.info(
            f"Authentication container ready (storage={self.settings.STORAGE_BACKEND}, "
            f"email={self.settings.EMAIL_BACKEND})"
        )

    async def shutdown(self) -> None:
        """Release the database engine and the email HTTP client."""
        await self.email_service.close()
        if self.database is not None:
            await self.database.close()
        logger.info("Authentication container shut down")

    async def health(self) -> dict:
        if self.database is None:
            return {"status": "healthy", "backend": "memory"}
        status = await self.database.health_check()
        return {**status, "backend": "database"}


def _build_email_service(settings: Settings) -> EmailService:
    if settings.EMAIL_BACKEND == "sendgrid":
        return SendGridEmailService(
            api_key=settings.SENDGRID_API_KEY,
            from_email=settings.SENDGRID_FROM_EMAIL,
            from_name=settings.SENDGRID_FROM_NAME,
            api_url=settings.SENDGRID_API_URL,
            timeout=settings.EMAIL_TIMEOUT_SECONDS,
        )
    return LoggingEmailService()


def build_container(
    settings: Settings,
    email_service: Optional[EmailService] = None,
) -> AuthContainer:
    """
    Build the authentication module from settings.

    Args:
        settings: Application settings
        email_service: Optional email backend overriding EMAIL_BACKEND

    Returns:
        AuthContainer: Fully wired container (call ``startup()`` before use)
    """
    database: Optional[DatabaseConnectionManager] = None

    if settings.STORAGE_BACKEND == "database":
        database = DatabaseConnectionManager(settings)
        database.initialize()
        user_repository = UserRepositoryImpl(database.session_factory)
        session_repository = SessionRepositoryImpl(database.session_factory)
        verification_code_repository = VerificationCodeRepositoryImpl(database.session_factory)
    else:
        user_repository = InMemoryUserRepository()
        session_repository = InMemorySessionRepository()
        verification_code_repository = InMemoryVerificationCodeRepository()

    password_service = Argon2PasswordService(
        memory_cost=settings.ARGON2_MEMORY_COST,
        time_cost=settings.ARGON2_TIME_COST,
        parallelism=settings.ARGON2_PARALLELISM,
    )
    token_service = JWTTokenService(
        signing_key=settings.jwt_signing_key,
        verification_key=settings.jwt_verification_key,
        algorithm=settings.JWT_ALGORITHM,
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
        access_token_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    email_service = email_service or _build_email_service(settings)

    password_policy = PasswordPolicy(min_length=settings.PASSWORD_MIN_LENGTH)
    max_sessions = settings.MAX_CONCURRENT_SESSIONS

    return AuthContainer(
        settings=settings,
        user_repository=user_repository,
        session_repository=session_repository,
        verification_code_repository=verification_code_repository,
        password_service=password_service,
        token_service=token_service,
        email_service=email_service,
        register_user=RegisterUserUseCase(
            user_repository,
            verification_code_repository,
            password_service,
            email_service,
            password_policy=password_policy,
            code_ttl=timedelta(minutes=settings.VERIFICATION_CODE_TTL_MINUTES),
        ),
        verify_user=VerifyUserUseCase(user_repository, verification_code_repository, email_service),
        login_user=LoginUserUseCase(
            user_repository,
            session_repository,
            password_service,
            token_service,
            email_service,
            max_concurrent_sessions=max_sessions,
            session_ttl=timedelta(days=settings.SESSION_EXPIRE_DAYS),
            max_failed_attempts=settings.MAX_FAILED_LOGIN_ATTEMPTS,
            lock_duration=timedelta(minutes=settings.ACCOUNT_LOCK_MINUTES),
        ),
        refresh_token=RefreshTokenUseCase(session_repository, token_service),
        logout=LogoutUseCase(session_repository),
        logout_all=LogoutAllUseCase(session_repository),
        list_sessions=ListSessionsUseCase(session_repository, max_concurrent_sessions=max_sessions),
        cleanup_expired_sessions=CleanupExpiredSessionsUseCase(session_repository),
        cleanup_expired_verification_codes=CleanupExpiredVerificationCodesUseCase(verification_code_repository),
        unlock_expired_lockouts=UnlockExpiredLockoutsUseCase(user_repository),
        revoke_excess_sessions=RevokeExcessSessionsUseCase(session_repository, max_concurrent_sessions=max_sessions),
        database=database,
    )
