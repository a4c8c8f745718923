# 📄 File: app/modules/authentication/application/use_cases/register_user.py
# 🧭 Purpose (Layman Explanation):
# Signs up a new account: checks the data, makes sure the email is not taken, stores the
# user as "waiting for verification" and emails them a 5-digit code.
#
# 🧪 Purpose (Technical Summary):
# RegisterUser use case. Builds value objects, rejects duplicate emails (also enforced
# atomically by the repository), hashes the password, persists the user and a 15-minute
# verification code, then sends the code. The user and code are committed before the
# email is sent; an email failure surfaces as REGISTRATION_FAILED and the account stays
# pending.
#
# 🔗 Dependencies:
# - Domain models, repositories and services
# - app.shared.utils.logging (security audit)
#
# 🔄 Connected Modules / Calls From:
# - container.py (construction)
# - presentation.api.v1.auth (POST /register)

import logging
from datetime import timedelta
from typing import Optional

from app.modules.authentication.application.commands import RegisterUserCommand
from app.modules.authentication.application.dto import RegisterUserResult
from app.modules.authentication.application.use_cases.base import UseCase
from app.modules.authentication.domain.models import (
    DEFAULT_PASSWORD_POLICY,
    Email,
    Password,
    PasswordPolicy,
    Phone,
    TenantType,
    User,
    VerificationCode,
)
from app.modules.authentication.domain.repositories import (
    UserRepository,
    VerificationCodeRepository,
)
from app.modules.authentication.domain.services import EmailService, PasswordService
from app.shared.core.exceptions import UserAlreadyExistsError
from app.shared.utils.logging import get_logger

logger = logging.getLogger(__name__)
security_logger = get_logger(__name__).security

USER_FACTORIES = {
    TenantType.PROFESSIONAL: User.create_professional,
    TenantType.COMPANY: User.create_company,
}


class RegisterUserUseCase(UseCase[RegisterUserCommand, RegisterUserResult]):
    """
    Register a user and send the verification code.

    Steps:
    1. Resolve the tenant type
    2. Build Email, Phone and Password value objects
    3. Reject an email that is already registered
    4. Hash the password
    5. Build the user with the factory for its tenant type and persist it
       (pending verification)
    6. Persist a verification code bound to the email
    7. Email the code
    """

    failure_code = "REGISTRATION_FAILED"
    failure_message = "User registration failed"

    def __init__(
        self,
        user_repository: UserRepository,
        verification_code_repository: VerificationCodeRepository,
        password_service: PasswordService,
        email_service: EmailService,
        password_policy: Optional[PasswordPolicy] = None,
        code_ttl: timedelta = timedelta(minutes=15),
    ):
        self.user_repository = user_repository
        self.verification_code_repository = verification_code_repository
        self.password_service = password_service
        self.email_service = email_service
        self.password_policy = password_policy or DEFAULT_PASSWORD_POLICY
        self.code_ttl = code_ttl

    async def handle(self, command: RegisterUserCommand) -> RegisterUserResult:
        tenant_type = TenantType.parse(command.tenant_type)

        email = Email.create(command.email)
        phone = Phone.create(command.phone)
        password = Password.create(command.password, self.password_policy)

        if await self.user_repository.exists_by_email(email):
            security_logger.log_authentication("register", False, email=email.value, reason="email taken")
            raise UserAlreadyExistsError(email.value)

        hashed_password = await self.password_service.hash(password)

        user = USER_FACTORIES[tenant_type](
            email=email,
            hashed_password=hashed_password,
            phone=phone,
            name=command.name.strip(),
            country=command.country.strip(),
            city=command.city.strip(),
        )
        # Storage rejects a concurrent registration of the same email
        user = await self.user_repository.save(user)

        verification_code = VerificationCode.create(email, ttl=self.code_ttl)
        await self.verification_code_repository.save(verification_code)

        await self.email_service.send_verification_code(email, verification_code)

        security_logger.log_authentication("register", True, user_id=user.id, email=email.value)
        logger.info(f"User {user.id} registered as {tenant_type.value}, awaiting verification")

        return RegisterUserResult(
            success=True,
            message="User registered successfully. Check your email for the verification code",
            user_id=user.id,
        )
