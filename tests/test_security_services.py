"""
Tests for the Argon2 password service and the JWT token service.
"""

from datetime import timedelta

import pytest
from jose import jwt

from app.modules.authentication.domain.models import Password
from app.modules.authentication.infrastructure.security import (
    Argon2PasswordService,
    JWTTokenService,
)
from app.shared.core.exceptions import InvalidTokenError, TokenExpiredError

SECRET = "unit-test-secret-0123456789abcdef"


@pytest.fixture
def password_service() -> Argon2PasswordService:
    return Argon2PasswordService(memory_cost=1024, time_cost=1, parallelism=1)


@pytest.fixture
def token_service() -> JWTTokenService:
    return JWTTokenService(signing_key=SECRET, verification_key=SECRET)


class TestArgon2PasswordService:
    async def test_hash_and_verify(self, password_service):
        hashed = await password_service.hash(Password.create("Sup3r-Secret!pw"))

        assert hashed.is_hashed
        assert hashed.value.startswith("$argon2id$")
        assert await password_service.verify("Sup3r-Secret!pw", hashed)
        assert not await password_service.verify("Sup3r-Secret!pX", hashed)

    async def test_hashes_are_salted(self, password_service):
        password = Password.create("Sup3r-Secret!pw")
        first = await password_service.hash(password)
        second = await password_service.hash(password)
        assert first.value != second.value

    async def test_hashed_value_is_not_rehashed(self, password_service):
        hashed = Password.create_from_hash("$argon2id$already")
        assert await password_service.hash(hashed) is hashed

    async def test_malformed_hash_does_not_verify(self, password_service):
        assert not await password_service.verify("anything", Password.create_from_hash("not-a-hash"))
        assert not await password_service.verify("", Password.create_from_hash("not-a-hash"))

    async def test_needs_rehash_after_cost_change(self, password_service):
        hashed = await password_service.hash(Password.create("Sup3r-Secret!pw"))
        stronger = Argon2PasswordService(memory_cost=2048, time_cost=2, parallelism=1)

        assert not password_service.needs_rehash(hashed)
        assert stronger.needs_rehash(hashed)
        assert await stronger.verify("Sup3r-Secret!pw", hashed)

    def test_temporary_password_satisfies_policy(self, password_service):
        password = password_service.generate_temporary_password()
        assert len(password.value) == 16
        assert not password.is_hashed


class TestJWTTokenService:
    def test_access_token_claims(self, token_service):
        token = token_service.generate_access_token("user-1", "session-1")

        claims = jwt.get_unverified_claims(token)
        assert claims["sub"] == claims["userId"] == "user-1"
        assert claims["sessionId"] == "session-1"
        assert claims["iss"] == "SIGma-System"
        assert claims["aud"] == "SIGma-Users"
        assert claims["exp"] - claims["iat"] == 15 * 60
        assert claims["jti"]

        payload = token_service.verify_access_token(token)
        assert payload.user_id == "user-1"
        assert payload.session_id == "session-1"

    def test_expired_token(self):
        service = JWTTokenService(SECRET, SECRET, access_token_ttl=timedelta(seconds=-30))
        token = service.generate_access_token("user-1", "session-1")

        with pytest.raises(TokenExpiredError) as exc_info:
            service.verify_access_token(token)
        assert exc_info.value.status_code == 401
        assert service.get_token_expiration_time(token) == 0

    def test_wrong_audience(self, token_service):
        other = JWTTokenService(SECRET, SECRET, audience="Someone-Else")
        with pytest.raises(InvalidTokenError):
            token_service.verify_access_token(other.generate_access_token("user-1", "session-1"))

    def test_wrong_signature(self, token_service):
        other = JWTTokenService("another-secret-0123456789abcdef", "another-secret-0123456789abcdef")
        with pytest.raises(InvalidTokenError):
            token_service.verify_access_token(other.generate_access_token("user-1", "session-1"))

    def test_missing_claims(self, token_service):
        token = jwt.encode(
            {"sub": "user-1", "iss": "SIGma-System", "aud": "SIGma-Users", "exp": 4102444800},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError) as exc_info:
            token_service.verify_access_token(token)
        assert "claims" in exc_info.value.message

    @pytest.mark.parametrize("token", ["", "not.a.jwt"])
    def test_garbage_token(self, token_service, token):
        with pytest.raises(InvalidTokenError):
            token_service.verify_access_token(token)

    def test_refresh_tokens(self, token_service):
        first = token_service.generate_refresh_token()
        second = token_service.generate_refresh_token()

        assert len(first) == 64 and first.isalnum()
        assert first != second
        assert token_service.verify_refresh_token(first)
        assert not token_service.verify_refresh_token(first[:-1])
        assert not token_service.verify_refresh_token("")

    def test_decode_token(self, token_service):
        token = token_service.generate_access_token("user-1", "session-1")
        assert token_service.decode_token(token)["sessionId"] == "session-1"
        assert token_service.decode_token("garbage") is None
        assert 0 < token_service.get_token_expiration_time(token) <= 15 * 60
