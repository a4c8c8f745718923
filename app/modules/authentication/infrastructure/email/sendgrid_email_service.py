# 📄 File: app/modules/authentication/infrastructure/email/sendgrid_email_service.py
# 🧭 Purpose (Layman Explanation):
# Sends the service's emails for real, through the SendGrid email API.
#
# 🧪 Purpose (Technical Summary):
# EmailService backend posting to SendGrid's v3 mail/send endpoint with httpx.AsyncClient.
# Transport errors and non-2xx responses raise EmailDeliveryError. One client is kept for
# the life of the service and released in close().
#
# 🔗 Dependencies:
# - httpx (async HTTP client)
# - templates.py (message rendering)
#
# 🔄 Connected Modules / Calls From:
# - container.py (EMAIL_BACKEND=sendgrid)

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import httpx

from app.modules.authentication.domain.models import Email, VerificationCode
from app.modules.authentication.domain.services import EmailService
from app.modules.authentication.infrastructure.email import templates
from app.modules.authentication.infrastructure.email.templates import EmailMessage
from app.shared.core.exceptions import EmailDeliveryError
from app.shared.utils.logging import mask_email

logger = logging.getLogger(__name__)

PROVIDER = "sendgrid"


class SendGridEmailService(EmailService):
    """
    SendGrid email backend.

    Args:
        api_key: SendGrid API key
        from_email: Verified sender address
        from_name: Sender display name
        api_url: API base URL
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests inject a MockTransport)
    """

    def __init__(
        self,
        api_key: str,
        from_email: str,
        from_name: str = "SIGma",
        api_url: str = "https://api.sendgrid.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._from_email = from_email
        self._from_name = from_name
        self._client = httpx.AsyncClient(
            base_url=api_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def _payload(self, message: EmailMessage) -> Dict[str, Any]:
        return {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": self._from_email, "name": self._from_name},
            "subject": message.subject,
            "content": [
                {"type": "text/plain", "value": message.text},
                {"type": "text/html", "value": message.html},
            ],
            "categories": [message.kind],
        }

    async def _deliver(self, message: EmailMessage) -> None:
        try:
            response = await self._client.post("/v3/mail/send", json=self._payload(message))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"SendGrid rejected {message.kind} email to {mask_email(message.to)}: "
                f"HTTP {e.response.status_code}"
            )
            raise EmailDeliveryError(
                f"Email provider returned HTTP {e.response.status_code}", provider=PROVIDER
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error sending {message.kind} email to {mask_email(message.to)}: {str(e)}")
            raise EmailDeliveryError("Email provider unreachable", provider=PROVIDER) from e

        logger.info(f"Sent {message.kind} email to {mask_email(message.to)}")

    async def send_verification_code(self, email: Email, verification_code: VerificationCode) -> None:
        await self._deliver(templates.verification_code_message(email, verification_code))

    async def send_welcome_email(self, email: Email, user_name: str) -> None:
        await self._deliver(templates.welcome_message(email, user_name))

    async def send_new_session_notification(self, email: Email, device_info: str, ip_address: str) -> None:
        await self._deliver(templates.new_session_message(email, device_info, ip_address))

    async def send_account_locked_notification(self, email: Email, unlocks_at: datetime) -> None:
        await self._deliver(templates.account_locked_message(email, unlocks_at))

    async def send_password_changed_notification(self, email: Email) -> None:
        await self._deliver(templates.password_changed_message(email))

    async def verify_configuration(self) -> bool:
        """Check that the API key is accepted by SendGrid."""
        try:
            response = await self._client.get("/v3/scopes")
        except httpx.HTTPError as e:
            logger.warning(f"SendGrid configuration check failed: {str(e)}")
            return False
        if response.status_code != 200:
            logger.warning(f"SendGrid configuration check returned HTTP {response.status_code}")
            return False
        return True

    async def close(self) -> None:
        await self._client.aclose()
