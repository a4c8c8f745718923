# 📄 File: app/modules/authentication/infrastructure/email/logging_email_service.py
# 🧭 Purpose (Layman Explanation):
# A pretend mail sender for development and tests: instead of sending emails it writes
# them to the log and keeps them in a list so they can be inspected.
# 🧪 Purpose (Technical Summary):
# EmailService backend that records rendered messages in ``sent_messages`` and logs them
# with the recipient masked. Verification codes only appear in logs at DEBUG level.
# 🔗 Dependencies:
# templates.py, app.shared.utils.logging (mask_email)
# 🔄 Connected Modules / Calls From:
# container.py (EMAIL_BACKEND=logging), tests

import logging
from datetime import datetime
from typing import List, Optional

from app.modules.authentication.domain.models import Email, VerificationCode
from app.modules.authentication.domain.services import EmailService
from app.modules.authentication.infrastructure.email import templates
from app.modules.authentication.infrastructure.email.templates import EmailMessage
from app.shared.utils.logging import mask_email

logger = logging.getLogger(__name__)


class LoggingEmailService(EmailService):
    """Email backend that logs instead of sending."""

    def __init__(self):
        self.sent_messages: List[EmailMessage] = []

    def _deliver(self, message: EmailMessage) -> None:
        self.sent_messages.append(message)
        logger.info(f"[email:{message.kind}] to={mask_email(message.to)} subject={message.subject!r}")
        logger.debug(f"[email:{message.kind}] body={message.text!r}")

    def last_message(self, kind: Optional[str] = None, to: Optional[str] = None) -> Optional[EmailMessage]:
        """Most recent recorded message, optionally filtered by kind and recipient."""
        for message in reversed(self.sent_messages):
            if (kind is None or message.kind == kind) and (to is None or message.to == to):
                return message
        return None

    async def send_verification_code(self, email: Email, verification_code: VerificationCode) -> None:
        self._deliver(templates.verification_code_message(email, verification_code))

    async def send_welcome_email(self, email: Email, user_name: str) -> None:
        self._deliver(templates.welcome_message(email, user_name))

    async def send_new_session_notification(self, email: Email, device_info: str, ip_address: str) -> None:
        self._deliver(templates.new_session_message(email, device_info, ip_address))

    async def send_account_locked_notification(self, email: Email, unlocks_at: datetime) -> None:
        self._deliver(templates.account_locked_message(email, unlocks_at))

    async def send_password_changed_notification(self, email: Email) -> None:
        self._deliver(templates.password_changed_message(email))

    async def verify_configuration(self) -> bool:
        return True
