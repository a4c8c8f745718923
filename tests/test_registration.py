"""
Tests for registration and email verification.
"""

from datetime import timedelta

import pytest

from app.modules.authentication.application.commands import VerifyUserCommand
from app.modules.authentication.domain.models import Email, TenantType, UserStatus, utc_now
from app.shared.core.exceptions import (
    EmailDeliveryError,
    InvalidPasswordError,
    InvalidTenantTypeError,
    InvalidVerificationCodeError,
    UseCaseFailedError,
    UserAlreadyExistsError,
    VerificationCodeExpiredError,
    VerificationCodeNotFoundError,
)
from tests.helpers import extract_code, registration


async def _emailed_code(email_service, email: str = "ana@example.com") -> str:
    return extract_code(email_service.last_message("verification_code", to=email).text)


class TestRegisterUser:
    async def test_creates_pending_user_and_sends_code(self, container, email_service):
        result = await container.register_user.execute(registration("  Ana@Example.com "))

        assert result.success is True
        user = await container.user_repository.find_by_id(result.user_id)
        assert user.email.value == "ana@example.com"
        assert user.status == UserStatus.PENDING_VERIFICATION
        assert user.phone.value == "+34600123456"
        assert user.hashed_password.is_hashed
        assert user.hashed_password.value.startswith("$argon2")

        message = email_service.last_message("verification_code")
        assert message.to == "ana@example.com"
        codes = await container.verification_code_repository.find_active_by_email(user.email)
        assert [c.code for c in codes] == [extract_code(message.text)]

    @pytest.mark.parametrize(
        "tenant_type, expected",
        [
            ("professional", TenantType.PROFESSIONAL),
            ("profesional", TenantType.PROFESSIONAL),
            ("company", TenantType.COMPANY),
            ("empresa", TenantType.COMPANY),
        ],
    )
    async def test_tenant_type_and_aliases(self, container, tenant_type, expected):
        result = await container.register_user.execute(registration(tenant_type=tenant_type))
        user = await container.user_repository.find_by_id(result.user_id)
        assert user.tenant_type == expected

    async def test_duplicate_email_conflicts(self, container):
        await container.register_user.execute(registration())

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await container.register_user.execute(registration("ANA@example.com"))
        assert exc_info.value.status_code == 409

    async def test_weak_password_rejected(self, container):
        with pytest.raises(InvalidPasswordError):
            await container.register_user.execute(registration(password="password"))
        assert not await container.user_repository.exists_by_email(Email.create("ana@example.com"))

    async def test_unknown_tenant_type(self, container):
        with pytest.raises(InvalidTenantTypeError):
            await container.register_user.execute(registration(tenant_type="agency"))

    async def test_email_failure_reports_registration_failed(self, container, email_service, monkeypatch):
        async def broken(*args, **kwargs):
            raise EmailDeliveryError("Email provider unreachable", provider="test")

        monkeypatch.setattr(email_service, "send_verification_code", broken)

        with pytest.raises(UseCaseFailedError) as exc_info:
            await container.register_user.execute(registration())

        assert exc_info.value.error_code == "REGISTRATION_FAILED"
        assert exc_info.value.status_code == 500
        # The user is already stored; only the notification failed
        assert await container.user_repository.exists_by_email(Email.create("ana@example.com"))


class TestVerifyUser:
    async def test_activates_user_and_sends_welcome(self, container, email_service):
        registered = await container.register_user.execute(registration())
        code = await _emailed_code(email_service)

        result = await container.verify_user.execute(VerifyUserCommand(code=code))

        assert result.user_id == registered.user_id
        user = await container.user_repository.find_by_id(result.user_id)
        assert user.status == UserStatus.ACTIVE
        assert email_service.last_message("welcome").to == "ana@example.com"
        assert await container.verification_code_repository.find_active_by_email(user.email) == []

    async def test_unknown_code(self, container):
        with pytest.raises(VerificationCodeNotFoundError) as exc_info:
            await container.verify_user.execute(VerifyUserCommand(code="00000"))
        assert exc_info.value.status_code == 404

    async def test_code_cannot_be_reused(self, container, email_service):
        await container.register_user.execute(registration())
        code = await _emailed_code(email_service)
        await container.verify_user.execute(VerifyUserCommand(code=code))

        with pytest.raises(InvalidVerificationCodeError):
            await container.verify_user.execute(VerifyUserCommand(code=code))

    async def test_expired_code(self, container, email_service):
        await container.register_user.execute(registration())
        code = await _emailed_code(email_service)
        stored = await container.verification_code_repository.find_by_code(code)
        stored.expires_at = utc_now() - timedelta(seconds=1)
        await container.verification_code_repository.update(stored)

        with pytest.raises(VerificationCodeExpiredError) as exc_info:
            await container.verify_user.execute(VerifyUserCommand(code=code))
        assert exc_info.value.status_code == 410

    async def test_attempts_are_counted_before_checks(self, container, email_service):
        await container.register_user.execute(registration())
        code = await _emailed_code(email_service)
        stored = await container.verification_code_repository.find_by_code(code)
        stored.attempts = 2
        await container.verification_code_repository.update(stored)

        # The third presentation exhausts the code even though it is correct
        with pytest.raises(InvalidVerificationCodeError):
            await container.verify_user.execute(VerifyUserCommand(code=code))

        user = await container.user_repository.find_by_email(Email.create("ana@example.com"))
        assert user.status == UserStatus.PENDING_VERIFICATION
