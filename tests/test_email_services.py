"""
Tests for the email templates and delivery backends.
"""

import json
from datetime import datetime, timezone

import httpx
import pytest

from app.modules.authentication.domain.models import Email, VerificationCode
from app.modules.authentication.infrastructure.email import (
    LoggingEmailService,
    SendGridEmailService,
    templates,
)
from app.shared.core.exceptions import EmailDeliveryError

EMAIL = Email.create("ana@example.com")


def sendgrid(handler) -> SendGridEmailService:
    return SendGridEmailService(
        api_key="SG.test-key",
        from_email="no-reply@sigma.test",
        from_name="SIGma",
        transport=httpx.MockTransport(handler),
    )


class TestTemplates:
    def test_verification_code_message(self):
        code = VerificationCode.create(EMAIL)
        message = templates.verification_code_message(EMAIL, code)

        assert message.kind == "verification_code"
        assert message.to == "ana@example.com"
        assert code.code in message.text
        assert "15 minutes" in message.text

    def test_html_is_escaped(self):
        message = templates.welcome_message(EMAIL, "<script>alert(1)</script>")
        assert "<script>" not in message.html
        assert "&lt;script&gt;" in message.html

    def test_account_locked_mentions_unlock_time(self):
        unlocks_at = datetime(2030, 1, 2, 3, 4, tzinfo=timezone.utc)
        message = templates.account_locked_message(EMAIL, unlocks_at)
        assert "2030-01-02 03:04 UTC" in message.text


class TestLoggingEmailService:
    async def test_records_messages(self):
        service = LoggingEmailService()

        await service.send_welcome_email(EMAIL, "Ana")
        await service.send_new_session_notification(EMAIL, "Safari on iOS", "198.51.100.4")
        await service.send_password_changed_notification(EMAIL)

        assert [m.kind for m in service.sent_messages] == ["welcome", "new_session", "password_changed"]
        assert service.last_message("new_session").text.startswith("A new sign-in")
        assert service.last_message(to="bob@example.com") is None
        assert await service.verify_configuration()


class TestSendGridEmailService:
    async def test_posts_mail_send_payload(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(202)

        service = sendgrid(handler)
        await service.send_verification_code(EMAIL, VerificationCode.create(EMAIL))
        await service.close()

        request = requests[0]
        assert request.url.path == "/v3/mail/send"
        assert request.headers["Authorization"] == "Bearer SG.test-key"
        body = json.loads(request.content)
        assert body["personalizations"] == [{"to": [{"email": "ana@example.com"}]}]
        assert body["from"] == {"email": "no-reply@sigma.test", "name": "SIGma"}
        assert [c["type"] for c in body["content"]] == ["text/plain", "text/html"]
        assert body["categories"] == ["verification_code"]

    async def test_provider_rejection(self):
        service = sendgrid(lambda request: httpx.Response(401, json={"errors": []}))

        with pytest.raises(EmailDeliveryError) as exc_info:
            await service.send_welcome_email(EMAIL, "Ana")

        assert exc_info.value.status_code == 502
        assert "401" in exc_info.value.message
        await service.close()

    async def test_provider_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        service = sendgrid(handler)
        with pytest.raises(EmailDeliveryError) as exc_info:
            await service.send_password_changed_notification(EMAIL)

        assert exc_info.value.message == "Email provider unreachable"
        await service.close()

    @pytest.mark.parametrize("status_code, expected", [(200, True), (403, False)])
    async def test_verify_configuration(self, status_code, expected):
        service = sendgrid(lambda request: httpx.Response(status_code, json={"scopes": []}))
        assert await service.verify_configuration() is expected
        await service.close()
