# 📄 File: app/modules/authentication/domain/services/email_service.py
# 🧭 Purpose (Layman Explanation):
# The contract for every email the service sends: the verification code, the welcome
# message and the security alerts (new login, locked account, password changed).
# 🧪 Purpose (Technical Summary):
# Email notification service interface implemented by the logging (development) and
# SendGrid (production) backends.
# 🔗 Dependencies:
# abc, datetime, domain models
# 🔄 Connected Modules / Calls From:
# RegisterUser, VerifyUser, LoginUser, infrastructure/email/*

from abc import ABC, abstractmethod
from datetime import datetime

from ..models.value_objects import Email
from ..models.verification_code import VerificationCode


class EmailService(ABC):
    """Outbound notification contract."""

    @abstractmethod
    async def send_verification_code(self, email: Email, verification_code: VerificationCode) -> None:
        pass

    @abstractmethod
    async def send_welcome_email(self, email: Email, user_name: str) -> None:
        pass

    @abstractmethod
    async def send_new_session_notification(self, email: Email, device_info: str, ip_address: str) -> None:
        pass

    @abstractmethod
    async def send_account_locked_notification(self, email: Email, unlocks_at: datetime) -> None:
        pass

    @abstractmethod
    async def send_password_changed_notification(self, email: Email) -> None:
        pass

    @abstractmethod
    async def verify_configuration(self) -> bool:
        """True if the backend is able to send."""
        pass

    async def close(self) -> None:
        """Release network resources held by the backend."""
        return None
