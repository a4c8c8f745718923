"""
Tests for the in-memory repositories: version checks and uniqueness rules.
"""

from datetime import timedelta

import pytest

from app.modules.authentication.domain.models import (
    DeviceMeta,
    Email,
    Password,
    Phone,
    Session,
    SessionStatus,
    TenantType,
    User,
    VerificationCode,
    utc_now,
)
from app.modules.authentication.infrastructure.memory import (
    InMemorySessionRepository,
    InMemoryUserRepository,
    InMemoryVerificationCodeRepository,
)
from app.shared.core.exceptions import (
    ConcurrentModificationError,
    SessionNotFoundError,
    UserAlreadyExistsError,
    UserNotFoundError,
)


def make_user(email: str = "ana@example.com") -> User:
    return User.create(
        tenant_type=TenantType.PROFESSIONAL,
        email=Email.create(email),
        hashed_password=Password.create_from_hash("$argon2id$stub"),
        phone=Phone.create("+34600123456"),
        name="Ana",
        country="Spain",
        city="Madrid",
    )


def make_session(user_id: str = "user-1", device_id: str = "device-1", refresh_token: str = "a" * 64) -> Session:
    return Session.create(
        user_id=user_id,
        device_id=device_id,
        device_meta=DeviceMeta(user_agent="pytest", ip_address="127.0.0.1"),
        refresh_token=refresh_token,
    )


class TestInMemoryUserRepository:
    async def test_save_and_find(self):
        repository = InMemoryUserRepository()
        user = await repository.save(make_user())

        found = await repository.find_by_email(Email.create("ANA@example.com"))

        assert found.id == user.id
        assert found is not user
        assert await repository.exists_by_email(user.email)

    async def test_duplicate_email(self):
        repository = InMemoryUserRepository()
        await repository.save(make_user())
        with pytest.raises(UserAlreadyExistsError):
            await repository.save(make_user())

    async def test_stale_update_is_rejected(self):
        repository = InMemoryUserRepository()
        user = await repository.save(make_user())
        first = await repository.find_by_id(user.id)
        second = await repository.find_by_id(user.id)

        first.verify()
        await repository.update(first)
        second.record_failed_login()

        with pytest.raises(ConcurrentModificationError) as exc_info:
            await repository.update(second)
        assert exc_info.value.status_code == 409

    async def test_update_of_unknown_user(self):
        repository = InMemoryUserRepository()
        with pytest.raises(UserNotFoundError):
            await repository.update(make_user())

    async def test_sequential_updates_on_one_instance(self):
        repository = InMemoryUserRepository()
        user = await repository.save(make_user())
        user.verify()
        await repository.update(user)
        user.record_successful_login()
        await repository.update(user)

        stored = await repository.find_by_id(user.id)
        assert stored.version == user.version == 3

    async def test_soft_delete(self):
        repository = InMemoryUserRepository()
        user = await repository.save(make_user())
        await repository.delete(user.id)
        assert (await repository.find_by_id(user.id)).is_deleted()

    async def test_locked_users_to_unlock(self):
        repository = InMemoryUserRepository()
        user = make_user()
        user.verify()
        user.record_failed_login(max_attempts=1, lock_duration=timedelta(seconds=-1))
        await repository.save(user)
        still_locked = make_user("bob@example.com")
        still_locked.verify()
        still_locked.record_failed_login(max_attempts=1)
        await repository.save(still_locked)

        due = await repository.find_locked_users_to_unlock()

        assert [u.id for u in due] == [user.id]
        assert await repository.count_active_by_tenant_type(TenantType.PROFESSIONAL) == 2


class TestInMemorySessionRepository:
    async def test_one_active_session_per_device(self):
        repository = InMemorySessionRepository()
        await repository.save(make_session())

        with pytest.raises(ConcurrentModificationError) as exc_info:
            await repository.save(make_session(refresh_token="b" * 64))
        assert exc_info.value.details["field"] == "device_id"

    async def test_lapsed_device_session_is_replaced(self):
        repository = InMemorySessionRepository()
        stale = make_session()
        stale.expires_at = utc_now() - timedelta(seconds=1)
        await repository.save(stale)

        await repository.save(make_session(refresh_token="b" * 64))

        assert (await repository.find_by_id(stale.id)).status == SessionStatus.EXPIRED
        assert await repository.count_active_by_user_id("user-1") == 1

    async def test_refresh_token_is_unique(self):
        repository = InMemorySessionRepository()
        await repository.save(make_session())
        with pytest.raises(ConcurrentModificationError):
            await repository.save(make_session(device_id="device-2"))

    async def test_find_by_refresh_token_skips_inactive_by_default(self):
        repository = InMemorySessionRepository()
        session = await repository.save(make_session())
        session.revoke()
        await repository.update(session)

        assert await repository.find_by_refresh_token("a" * 64) is None
        found = await repository.find_by_refresh_token("a" * 64, include_inactive=True)
        assert found.status == SessionStatus.REVOKED

    async def test_revoke_oldest_keeps_most_recent(self):
        repository = InMemorySessionRepository()
        sessions = []
        for index in range(4):
            session = make_session(device_id=f"d{index}", refresh_token=str(index) * 64)
            session.last_access_at = utc_now() - timedelta(minutes=10 - index)
            sessions.append(await repository.save(session))

        revoked = await repository.revoke_oldest_sessions("user-1", keep_count=2)

        assert revoked == 2
        active = await repository.find_active_by_user_id("user-1")
        assert [s.device_id for s in active] == ["d3", "d2"]

    async def test_revoke_all_and_delete_expired(self):
        repository = InMemorySessionRepository()
        await repository.save(make_session())
        await repository.save(make_session(device_id="device-2", refresh_token="b" * 64))
        await repository.save(make_session(user_id="user-2", refresh_token="c" * 64))

        assert await repository.revoke_all_by_user_id("user-1") == 2
        assert await repository.delete_expired() == 2
        assert await repository.count_active_by_user_id("user-2") == 1

    async def test_update_of_deleted_session(self):
        repository = InMemorySessionRepository()
        session = await repository.save(make_session())
        await repository.delete(session.id)
        session.update_last_access()
        with pytest.raises(SessionNotFoundError):
            await repository.update(session)

    async def test_expiring_sessions(self):
        repository = InMemorySessionRepository()
        soon = make_session()
        soon.expires_at = utc_now() + timedelta(minutes=5)
        await repository.save(soon)
        await repository.save(make_session(device_id="device-2", refresh_token="b" * 64))

        expiring = await repository.find_expiring_sessions_in_next(10)

        assert [s.id for s in expiring] == [soon.id]


class TestInMemoryVerificationCodeRepository:
    async def test_find_by_code_prefers_usable_code(self):
        repository = InMemoryVerificationCodeRepository()
        email = Email.create("ana@example.com")
        used = VerificationCode.create(email)
        used.use()
        await repository.save(used)
        fresh = VerificationCode.create(email).model_copy(update={"code": used.code})
        await repository.save(fresh)

        found = await repository.find_by_code(used.code)

        assert found.id == fresh.id

    async def test_revoke_all_and_cleanup(self):
        repository = InMemoryVerificationCodeRepository()
        email = Email.create("ana@example.com")
        await repository.save(VerificationCode.create(email))
        await repository.save(VerificationCode.create(email))
        await repository.save(VerificationCode.create(Email.create("bob@example.com")))

        assert await repository.revoke_all_by_email(email) == 2
        assert await repository.find_active_by_email(email) == []
        assert await repository.delete_expired() == 2
