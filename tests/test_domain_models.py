"""
Tests for value objects and entity state transitions.
"""

from datetime import timedelta

import pytest

from app.modules.authentication.domain.models import (
    DeviceMeta,
    Email,
    Password,
    PasswordPolicy,
    Phone,
    Session,
    SessionStatus,
    TenantType,
    User,
    UserStatus,
    VerificationCode,
    utc_now,
)
from app.shared.core.exceptions import (
    InvalidEmailError,
    InvalidEntityStateError,
    InvalidPasswordError,
    InvalidPhoneError,
    InvalidTenantTypeError,
)


def _user() -> User:
    return User.create(
        tenant_type=TenantType.COMPANY,
        email=Email.create("owner@acme.io"),
        hashed_password=Password.create_from_hash("$argon2id$stub"),
        phone=Phone.create("+4915112345678"),
        name="Acme",
        country="Germany",
        city="Berlin",
    )


def _session(**overrides) -> Session:
    session = Session.create(
        user_id="user-1",
        device_id="device-1",
        device_meta=DeviceMeta(user_agent="pytest", ip_address="127.0.0.1"),
        refresh_token="a" * 64,
    )
    for field, value in overrides.items():
        setattr(session, field, value)
    return session


class TestEmail:
    def test_normalizes_case_and_whitespace(self):
        assert Email.create("  Ana.Torres@Example.COM ").value == "ana.torres@example.com"

    @pytest.mark.parametrize("raw", ["", "   ", "no-at-sign.com", "a@b", "a b@example.com", None])
    def test_rejects_malformed(self, raw):
        with pytest.raises(InvalidEmailError) as exc_info:
            Email.create(raw)
        assert exc_info.value.error_code == "INVALID_EMAIL"
        assert exc_info.value.status_code == 400

    def test_rejects_overlong_address(self):
        with pytest.raises(InvalidEmailError):
            Email.create("a" * 320 + "@example.com")

    def test_domain(self):
        assert Email.create("ana@example.com").domain == "example.com"

    @pytest.mark.parametrize("raw", ["ana@example.com", "  Ana.Torres@Example.COM ", "x+tag@sub.example.org"])
    def test_create_is_idempotent(self, raw):
        once = Email.create(raw)
        assert Email.create(once.value) == once


class TestPassword:
    def test_accepts_compliant_password(self):
        password = Password.create("Sup3r-Secret!pw")
        assert password.is_hashed is False

    @pytest.mark.parametrize(
        "raw, reason",
        [
            ("Sh0rt!", "at least 12"),
            ("lowercase-only-1!", "uppercase"),
            ("UPPERCASE-ONLY-1!", "lowercase"),
            ("No-Numbers-Here!", "number"),
            ("NoSymbols12345", "special"),
            ("With Space-123!", "whitespace"),
        ],
    )
    def test_reports_first_violated_rule(self, raw, reason):
        with pytest.raises(InvalidPasswordError) as exc_info:
            Password.create(raw)
        assert reason in exc_info.value.message

    def test_empty_password_is_required(self):
        with pytest.raises(InvalidPasswordError):
            Password.create("")

    def test_custom_policy(self):
        policy = PasswordPolicy(min_length=4, require_symbols=False)
        assert Password.create("Ab1c", policy).value == "Ab1c"

    def test_hash_wrapper_skips_policy(self):
        password = Password.create_from_hash("x")
        assert password.is_hashed is True

    def test_value_is_hidden_in_repr(self):
        password = Password.create("Sup3r-Secret!pw")
        assert "Sup3r" not in repr(password)
        assert str(password) == "[PROTECTED]"


class TestPhone:
    def test_strips_formatting(self):
        assert Phone.create("+34 (600) 123-456").value == "+34600123456"

    @pytest.mark.parametrize("raw", ["600123456", "+0123456789", "+12", "+1234567890123456", None])
    def test_rejects_non_international(self, raw):
        with pytest.raises(InvalidPhoneError):
            Phone.create(raw)

    def test_formatted(self):
        assert Phone.create("+34600123456").formatted() == "+34 600 123 456"


class TestTenantType:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("professional", TenantType.PROFESSIONAL),
            ("COMPANY", TenantType.COMPANY),
            ("profesional", TenantType.PROFESSIONAL),
            ("Empresa", TenantType.COMPANY),
        ],
    )
    def test_parse(self, raw, expected):
        assert TenantType.parse(raw) is expected

    def test_unknown_value(self):
        with pytest.raises(InvalidTenantTypeError):
            TenantType.parse("freelancer")


class TestUser:
    def test_created_pending_with_version_one(self):
        user = _user()
        assert user.status == UserStatus.PENDING_VERIFICATION
        assert user.version == 1
        assert user.failed_login_attempts == 0

    @pytest.mark.parametrize(
        "factory, tenant_type",
        [(User.create_professional, TenantType.PROFESSIONAL), (User.create_company, TenantType.COMPANY)],
    )
    def test_tenant_factories(self, factory, tenant_type):
        user = factory(
            email=Email.create("owner@acme.io"),
            hashed_password=Password.create_from_hash("$argon2id$stub"),
            phone=Phone.create("+4915112345678"),
            name="Acme",
            country="Germany",
            city="Berlin",
        )
        assert user.tenant_type == tenant_type
        assert user.status == UserStatus.PENDING_VERIFICATION

    def test_verify_activates_and_bumps_version(self):
        user = _user()
        user.verify()
        assert user.status == UserStatus.ACTIVE
        assert user.version == 2

    def test_verify_is_noop_when_not_pending(self):
        user = _user()
        user.suspend()
        version = user.version
        user.verify()
        assert user.status == UserStatus.SUSPENDED
        assert user.version == version

    def test_lock_after_max_failed_attempts(self):
        user = _user()
        user.verify()
        for _ in range(4):
            user.record_failed_login()
        assert not user.is_locked()

        user.record_failed_login()

        assert user.failed_login_attempts == 5
        assert user.is_locked()
        assert not user.is_active()

    def test_successful_login_resets_lockout(self):
        user = _user()
        user.verify()
        user.record_failed_login(max_attempts=1)
        user.record_successful_login()
        assert user.failed_login_attempts == 0
        assert user.locked_until is None
        assert user.last_login_at is not None

    def test_activate_clears_lockout(self):
        user = _user()
        user.record_failed_login(max_attempts=1)
        user.activate()
        assert user.is_active()

    def test_expected_version_tracks_persisted_state(self):
        user = _user()
        user.mark_persisted()
        user.verify()
        user.record_successful_login()
        assert user.version == 3
        assert user.expected_version() == 1


class TestVerificationCode:
    def test_code_is_five_digits(self):
        code = VerificationCode.create(Email.create("ana@example.com"))
        assert len(code.code) == 5 and code.code.isdigit()
        assert code.is_valid()

    def test_use_marks_used(self):
        code = VerificationCode.create(Email.create("ana@example.com"))
        code.use()
        assert code.is_used
        with pytest.raises(InvalidEntityStateError):
            code.use()

    def test_attempt_cap(self):
        code = VerificationCode.create(Email.create("ana@example.com"))
        for _ in range(3):
            code.increment_attempts()
        assert not code.is_valid()

    def test_expired_code_is_invalid(self):
        code = VerificationCode.create(Email.create("ana@example.com"), ttl=timedelta(seconds=-1))
        assert code.is_expired()
        assert not code.is_valid()


class TestSession:
    def test_new_session_is_active(self):
        session = _session()
        assert session.status == SessionStatus.ACTIVE
        assert session.is_active()
        assert session.time_until_expiry() > timedelta(days=6)

    def test_rotation_keeps_id(self):
        session = _session()
        session_id = session.id
        session.update_refresh_token("b" * 64, utc_now() + timedelta(days=7))
        assert session.id == session_id
        assert session.refresh_token == "b" * 64

    def test_rotation_rejected_after_revoke(self):
        session = _session()
        session.revoke()
        with pytest.raises(InvalidEntityStateError):
            session.update_refresh_token("b" * 64, utc_now() + timedelta(days=7))

    def test_mark_as_expired_keeps_revoked(self):
        session = _session()
        session.revoke()
        session.mark_as_expired()
        assert session.status == SessionStatus.REVOKED

    def test_past_expiry_is_inactive(self):
        session = _session(expires_at=utc_now() - timedelta(seconds=1))
        assert not session.is_active()
        assert session.time_until_expiry() == timedelta(0)

    def test_device_description(self):
        meta = DeviceMeta(user_agent="x", ip_address="1.2.3.4", browser="Safari", os="iOS")
        assert meta.describe() == "Safari on iOS"
