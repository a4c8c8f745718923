"""
End-to-end tests of the HTTP API through FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from tests.helpers import TEST_PASSWORD, extract_code, make_settings

API = "/api/v1/auth"

REGISTRATION = {
    "email": "ana@example.com",
    "phone": "+34600123456",
    "name": "Ana Torres",
    "country": "Spain",
    "city": "Madrid",
    "password": TEST_PASSWORD,
    "tenantType": "profesional",
}


@pytest.fixture
def client():
    app = create_app(make_settings())
    with TestClient(app) as client:
        yield client


def register_and_verify(client: TestClient) -> None:
    response = client.post(f"{API}/register", json=REGISTRATION)
    assert response.status_code == 202, response.text
    email_service = client.app.state.container.email_service
    code = extract_code(email_service.last_message("verification_code").text)
    response = client.post(f"{API}/verify", json={"code": code})
    assert response.status_code == 200, response.text


def login(client: TestClient, device_id: str = "device-1") -> dict:
    response = client.post(
        f"{API}/login",
        json={"email": REGISTRATION["email"], "password": TEST_PASSWORD, "deviceId": device_id},
        headers={"User-Agent": "pytest-client", "X-Forwarded-For": "198.51.100.9, 10.0.0.1"},
    )
    assert response.status_code == 200, response.text
    return response.json()


def bearer(body: dict) -> dict:
    return {"Authorization": f"Bearer {body['accessToken']}"}


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["storage"] == "memory"
        assert body["environment"] == "test"

    def test_probes(self, client):
        assert client.get("/health/live").status_code == 200
        ready = client.get("/health/ready")
        assert ready.status_code == 200
        assert ready.json()["storage"]["backend"] == "memory"

    def test_request_id_is_echoed(self, client):
        response = client.get(f"{API}/me/sessions", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"


class TestRegistrationFlow:
    def test_register_returns_accepted(self, client):
        response = client.post(f"{API}/register", json=REGISTRATION)

        assert response.status_code == 202
        body = response.json()
        assert body["success"] is True
        assert body["userId"]

    def test_duplicate_registration(self, client):
        client.post(f"{API}/register", json=REGISTRATION)
        response = client.post(f"{API}/register", json=REGISTRATION)

        assert response.status_code == 409
        assert response.json()["code"] == "USER_ALREADY_EXISTS"
        assert response.headers["X-Error-Code"] == "USER_ALREADY_EXISTS"

    def test_missing_fields(self, client):
        response = client.post(f"{API}/register", json={"email": "ana@example.com"})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        fields = {error["field"] for error in body["details"]["errors"]}
        assert "password" in fields

    def test_weak_password(self, client):
        response = client.post(f"{API}/register", json={**REGISTRATION, "password": "short"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PASSWORD"

    def test_unknown_code(self, client):
        response = client.post(f"{API}/verify", json={"code": "00000"})
        assert response.status_code == 404
        assert response.json()["code"] == "VERIFICATION_CODE_NOT_FOUND"

    def test_login_before_verification(self, client):
        client.post(f"{API}/register", json=REGISTRATION)
        response = client.post(
            f"{API}/login",
            json={"email": REGISTRATION["email"], "password": TEST_PASSWORD, "deviceId": "d"},
        )
        assert response.status_code == 403
        assert response.json()["code"] == "USER_NOT_VERIFIED"


class TestSessionFlow:
    def test_login_refresh_and_list(self, client):
        register_and_verify(client)
        body = login(client)

        assert body["tokenType"] == "bearer"
        assert body["user"]["tenantType"] == "professional"

        refreshed = client.post(f"{API}/refresh", json={"refreshToken": body["refreshToken"]})
        assert refreshed.status_code == 200
        assert refreshed.json()["accessToken"]

        listed = client.get(f"{API}/me/sessions", headers=bearer(body))
        assert listed.status_code == 200
        sessions = listed.json()["sessions"]
        assert len(sessions) == 1
        assert sessions[0]["current"] is True
        assert sessions[0]["ipAddress"] == "198.51.100.9"
        assert sessions[0]["userAgent"] == "pytest-client"

    def test_wrong_password(self, client):
        register_and_verify(client)
        response = client.post(
            f"{API}/login",
            json={"email": REGISTRATION["email"], "password": "Wrong-Passw0rd!", "deviceId": "d"},
        )
        assert response.status_code == 401
        assert response.json()["code"] == "AUTH_INVALID_CREDENTIALS"

    def test_refresh_without_token(self, client):
        response = client.post(f"{API}/refresh", json={})
        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_NOT_FOUND"

    def test_logout_then_refresh(self, client):
        register_and_verify(client)
        body = login(client)

        response = client.post(f"{API}/logout", json={"sessionId": body["sessionId"]})
        assert response.status_code == 200
        assert response.json()["sessionId"] == body["sessionId"]

        refreshed = client.post(f"{API}/refresh", json={"refreshToken": body["refreshToken"]})
        assert refreshed.status_code == 401
        assert refreshed.json()["code"] == "SESSION_EXPIRED"

    def test_logout_by_device_uses_bearer_identity(self, client):
        register_and_verify(client)
        body = login(client, device_id="tablet")

        response = client.post(f"{API}/logout", json={"deviceId": "tablet"}, headers=bearer(body))

        assert response.status_code == 200
        assert response.json()["sessionId"] == body["sessionId"]

    def test_logout_by_device_without_user(self, client):
        response = client.post(f"{API}/logout", json={"deviceId": "tablet"})
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_logout_requires_identifier(self, client):
        response = client.post(f"{API}/logout", json={})
        assert response.status_code == 400

    def test_logout_all(self, client):
        register_and_verify(client)
        login(client, device_id="laptop")
        body = login(client, device_id="phone")

        response = client.post(f"{API}/logout-all", headers=bearer(body))

        assert response.status_code == 200
        assert response.json()["revokedCount"] == 2

    def test_logout_all_requires_token(self, client):
        response = client.post(f"{API}/logout-all")
        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_NOT_FOUND"

    def test_invalid_bearer_token(self, client):
        response = client.get(f"{API}/me/sessions", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_session_cap(self, client):
        register_and_verify(client)
        for device in ("d1", "d2", "d3", "d4"):
            login(client, device_id=device)

        response = client.post(
            f"{API}/login",
            json={"email": REGISTRATION["email"], "password": TEST_PASSWORD, "deviceId": "d5"},
        )

        assert response.status_code == 429
        assert response.json()["details"]["maxSessions"] == 4


class TestUnexpectedErrors:
    def test_unhandled_exception_renders_internal_error(self):
        app = create_app(make_settings())

        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "INTERNAL_ERROR"
        assert "kaboom" not in body["message"]
