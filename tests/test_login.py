"""
Tests for credential login, lockout and device-scoped sessions.
"""

import asyncio

import pytest

from app.modules.authentication.application.dto import LoginUserResult
from app.modules.authentication.domain.models import Email, SessionStatus
from app.shared.core.exceptions import (
    AccountLockedError,
    AccountSuspendedError,
    ConcurrentModificationError,
    InvalidCredentialsError,
    MaxSessionsExceededError,
    UserNotFoundError,
    UserNotVerifiedError,
)
from tests.helpers import login_command, registration


class TestLoginUser:
    async def test_returns_tokens_bound_to_new_session(self, container, register_and_verify):
        user_id = await register_and_verify()

        result = await container.login_user.execute(login_command())

        assert result.message == "Login successful"
        assert result.user.id == user_id
        assert result.user.status == "active"
        assert len(result.refresh_token) == 64
        assert result.expires_in == 15 * 60

        payload = container.token_service.verify_access_token(result.access_token)
        assert payload.user_id == user_id
        assert payload.session_id == result.session_id

        session = await container.session_repository.find_by_id(result.session_id)
        assert session.device_id == "device-1"
        assert session.device_meta.ip_address == "203.0.113.7"

        user = await container.user_repository.find_by_id(user_id)
        assert user.last_login_at is not None

    async def test_unknown_email(self, container):
        with pytest.raises(UserNotFoundError) as exc_info:
            await container.login_user.execute(login_command("nobody@example.com"))
        assert exc_info.value.status_code == 404

    async def test_pending_user_cannot_log_in(self, container):
        await container.register_user.execute(registration())

        with pytest.raises(UserNotVerifiedError) as exc_info:
            await container.login_user.execute(login_command())
        assert exc_info.value.status_code == 403

    async def test_wrong_password_is_counted(self, container, register_and_verify):
        user_id = await register_and_verify()

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await container.login_user.execute(login_command(password="Wrong-Passw0rd!"))

        assert exc_info.value.status_code == 401
        user = await container.user_repository.find_by_id(user_id)
        assert user.failed_login_attempts == 1

    async def test_account_locks_after_five_failures(self, container, email_service, register_and_verify):
        await register_and_verify()
        for _ in range(5):
            with pytest.raises(InvalidCredentialsError):
                await container.login_user.execute(login_command(password="Wrong-Passw0rd!"))

        with pytest.raises(AccountLockedError) as exc_info:
            await container.login_user.execute(login_command())

        assert exc_info.value.status_code == 423
        assert "lockedUntil" in exc_info.value.details
        assert email_service.last_message("account_locked").to == "ana@example.com"

    async def test_successful_login_resets_failures(self, container, register_and_verify):
        user_id = await register_and_verify()
        with pytest.raises(InvalidCredentialsError):
            await container.login_user.execute(login_command(password="Wrong-Passw0rd!"))

        await container.login_user.execute(login_command())

        user = await container.user_repository.find_by_id(user_id)
        assert user.failed_login_attempts == 0

    async def test_suspended_user(self, container, register_and_verify):
        user_id = await register_and_verify()
        user = await container.user_repository.find_by_id(user_id)
        user.suspend()
        await container.user_repository.update(user)

        with pytest.raises(AccountSuspendedError):
            await container.login_user.execute(login_command())

    async def test_same_device_rotates_refresh_token(self, container, register_and_verify):
        user_id = await register_and_verify()
        first = await container.login_user.execute(login_command())

        second = await container.login_user.execute(login_command())

        assert second.message == "Session updated"
        assert second.session_id == first.session_id
        assert second.refresh_token != first.refresh_token
        assert await container.session_repository.count_active_by_user_id(user_id) == 1
        assert await container.session_repository.find_by_refresh_token(first.refresh_token) is None

    async def test_new_device_notifies_when_others_active(self, container, email_service, register_and_verify):
        await register_and_verify()
        await container.login_user.execute(login_command(device_id="laptop"))
        assert email_service.last_message("new_session") is None

        await container.login_user.execute(login_command(device_id="phone"))

        message = email_service.last_message("new_session")
        assert message.to == "ana@example.com"
        assert "Firefox on Linux" in message.text

    async def test_session_cap(self, container, register_and_verify):
        user_id = await register_and_verify()
        for device in ("d1", "d2", "d3", "d4"):
            await container.login_user.execute(login_command(device_id=device))

        with pytest.raises(MaxSessionsExceededError) as exc_info:
            await container.login_user.execute(login_command(device_id="d5"))

        assert exc_info.value.status_code == 429
        assert await container.session_repository.count_active_by_user_id(user_id) == 4

        # An existing device can still log in at the cap
        result = await container.login_user.execute(login_command(device_id="d2"))
        assert result.message == "Session updated"

    async def test_device_can_log_in_again_after_logout(self, container, register_and_verify):
        await register_and_verify()
        first = await container.login_user.execute(login_command())
        session = await container.session_repository.find_by_id(first.session_id)
        session.revoke()
        await container.session_repository.update(session)

        second = await container.login_user.execute(login_command())

        assert second.session_id != first.session_id
        old = await container.session_repository.find_by_id(first.session_id)
        assert old.status == SessionStatus.REVOKED

    async def test_email_is_case_insensitive(self, container, register_and_verify):
        await register_and_verify()
        result = await container.login_user.execute(login_command("ANA@EXAMPLE.COM"))
        assert result.user.email == "ana@example.com"

    async def test_lock_survives_correct_password(self, container, register_and_verify):
        await register_and_verify()
        user = await container.user_repository.find_by_email(Email.create("ana@example.com"))
        user.record_failed_login(max_attempts=1)
        await container.user_repository.update(user)

        with pytest.raises(AccountLockedError):
            await container.login_user.execute(login_command())


def split_outcomes(results):
    winners = [r for r in results if isinstance(r, LoginUserResult)]
    errors = [r for r in results if not isinstance(r, LoginUserResult)]
    return winners, errors


class TestConcurrentLogins:
    async def test_parallel_wrong_passwords_all_count_toward_lock(self, container, register_and_verify):
        user_id = await register_and_verify()
        wrong = login_command(password="Wrong-Passw0rd!")

        results = await asyncio.gather(
            *(container.login_user.execute(wrong) for _ in range(5)),
            return_exceptions=True,
        )

        assert [type(r) for r in results] == [InvalidCredentialsError] * 5
        user = await container.user_repository.find_by_id(user_id)
        assert user.failed_login_attempts == 5
        assert user.locked_until is not None

        with pytest.raises(AccountLockedError):
            await container.login_user.execute(login_command())

    async def test_parallel_new_devices_leave_no_orphan_session(self, container, register_and_verify):
        user_id = await register_and_verify()

        results = await asyncio.gather(
            container.login_user.execute(login_command(device_id="dev0")),
            container.login_user.execute(login_command(device_id="dev1")),
            return_exceptions=True,
        )

        winners, errors = split_outcomes(results)
        assert len(winners) == 1
        assert [type(e) for e in errors] == [ConcurrentModificationError]

        active = await container.session_repository.find_active_by_user_id(user_id)
        assert [s.id for s in active] == [winners[0].session_id]

    async def test_parallel_new_devices_at_the_cap(self, container, register_and_verify):
        user_id = await register_and_verify()
        for device in ("d1", "d2", "d3"):
            await container.login_user.execute(login_command(device_id=device))

        results = await asyncio.gather(
            container.login_user.execute(login_command(device_id="d4")),
            container.login_user.execute(login_command(device_id="d5")),
            return_exceptions=True,
        )

        winners, errors = split_outcomes(results)
        assert len(winners) == 1
        assert len(errors) == 1
        assert isinstance(errors[0], (ConcurrentModificationError, MaxSessionsExceededError))
        assert await container.session_repository.count_active_by_user_id(user_id) == 4

    async def test_parallel_same_device_logins_rotate_once(self, container, register_and_verify):
        user_id = await register_and_verify()
        await container.login_user.execute(login_command())

        results = await asyncio.gather(
            container.login_user.execute(login_command()),
            container.login_user.execute(login_command()),
            return_exceptions=True,
        )

        winners, errors = split_outcomes(results)
        assert len(winners) == 1
        assert [type(e) for e in errors] == [ConcurrentModificationError]

        active = await container.session_repository.find_active_by_user_id(user_id)
        assert len(active) == 1
        assert active[0].refresh_token == winners[0].refresh_token
