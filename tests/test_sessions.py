"""
Tests for token refresh, logout and session listing.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from app.modules.authentication.application.commands import (
    ListSessionsCommand,
    LogoutAllCommand,
    LogoutCommand,
    RefreshTokenCommand,
)
from app.modules.authentication.domain.models import SessionStatus, utc_now
from app.shared.core.exceptions import (
    SessionExpiredError,
    SessionNotFoundError,
    TokenNotFoundError,
)
from tests.helpers import login_command


@pytest.fixture
async def logged_in(container, register_and_verify):
    user_id = await register_and_verify()
    result = await container.login_user.execute(login_command())
    return user_id, result


class TestRefreshToken:
    async def test_issues_access_token_for_same_session(self, container, logged_in):
        user_id, login = logged_in

        result = await container.refresh_token.execute(RefreshTokenCommand(refresh_token=login.refresh_token))

        payload = container.token_service.verify_access_token(result.access_token)
        assert payload.user_id == user_id
        assert payload.session_id == login.session_id
        assert result.expires_in == container.token_service.access_token_ttl_seconds

        session = await container.session_repository.find_by_id(login.session_id)
        assert session.refresh_token == login.refresh_token

    @pytest.mark.parametrize("token", ["", "short", "!" * 64])
    async def test_missing_or_malformed_token(self, container, token):
        with pytest.raises(TokenNotFoundError) as exc_info:
            await container.refresh_token.execute(RefreshTokenCommand(refresh_token=token))
        assert exc_info.value.status_code == 401

    async def test_unknown_token(self, container):
        with pytest.raises(SessionNotFoundError) as exc_info:
            await container.refresh_token.execute(
                RefreshTokenCommand(refresh_token=container.token_service.generate_refresh_token())
            )
        assert exc_info.value.status_code == 404

    async def test_revoked_session(self, container, logged_in):
        _, login = logged_in
        await container.logout.execute(LogoutCommand(session_id=login.session_id))

        with pytest.raises(SessionExpiredError):
            await container.refresh_token.execute(RefreshTokenCommand(refresh_token=login.refresh_token))

    async def test_expired_session(self, container, logged_in):
        _, login = logged_in
        session = await container.session_repository.find_by_id(login.session_id)
        session.expires_at = utc_now() - timedelta(seconds=1)
        await container.session_repository.update(session)

        with pytest.raises(SessionExpiredError) as exc_info:
            await container.refresh_token.execute(RefreshTokenCommand(refresh_token=login.refresh_token))
        assert exc_info.value.error_code == "SESSION_EXPIRED"


class TestLogout:
    async def test_by_session_id(self, container, logged_in):
        _, login = logged_in

        result = await container.logout.execute(LogoutCommand(session_id=login.session_id))

        assert result.session_id == login.session_id
        session = await container.session_repository.find_by_id(login.session_id)
        assert session.status == SessionStatus.REVOKED

    async def test_by_refresh_token(self, container, logged_in):
        _, login = logged_in
        result = await container.logout.execute(LogoutCommand(refresh_token=login.refresh_token))
        assert result.session_id == login.session_id

    async def test_by_device_id(self, container, logged_in):
        user_id, login = logged_in
        result = await container.logout.execute(LogoutCommand(device_id="device-1", user_id=user_id))
        assert result.session_id == login.session_id

    async def test_twice_reports_not_found(self, container, logged_in):
        _, login = logged_in
        await container.logout.execute(LogoutCommand(refresh_token=login.refresh_token))

        with pytest.raises(SessionNotFoundError):
            await container.logout.execute(LogoutCommand(refresh_token=login.refresh_token))

    async def test_other_users_session_is_hidden(self, container, logged_in):
        _, login = logged_in
        with pytest.raises(SessionNotFoundError):
            await container.logout.execute(LogoutCommand(session_id=login.session_id, user_id="someone-else"))

    def test_device_id_requires_user(self):
        with pytest.raises(ValidationError):
            LogoutCommand(device_id="device-1")


class TestLogoutAll:
    async def test_revokes_every_active_session(self, container, register_and_verify):
        user_id = await register_and_verify()
        for device in ("d1", "d2", "d3"):
            await container.login_user.execute(login_command(device_id=device))

        result = await container.logout_all.execute(LogoutAllCommand(user_id=user_id))

        assert result.revoked_count == 3
        assert await container.session_repository.count_active_by_user_id(user_id) == 0

    async def test_nothing_to_revoke(self, container, register_and_verify):
        user_id = await register_and_verify()
        result = await container.logout_all.execute(LogoutAllCommand(user_id=user_id))
        assert result.revoked_count == 0


class TestListSessions:
    async def test_marks_current_session(self, container, register_and_verify):
        user_id = await register_and_verify()
        laptop = await container.login_user.execute(login_command(device_id="laptop"))
        await container.login_user.execute(login_command(device_id="phone"))

        result = await container.list_sessions.execute(
            ListSessionsCommand(user_id=user_id, current_session_id=laptop.session_id)
        )

        assert result.max_sessions == 4
        assert {s.device_id for s in result.sessions} == {"laptop", "phone"}
        current = [s for s in result.sessions if s.current]
        assert [s.id for s in current] == [laptop.session_id]
