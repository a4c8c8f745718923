# 📄 File: app/modules/authentication/domain/models/verification_code.py
# 🧭 Purpose (Layman Explanation):
# The 5-digit code we email to new users. It works once, for 15 minutes, and only allows
# three tries so nobody can guess it.
# 🧪 Purpose (Technical Summary):
# Single-use verification code aggregate. Valid iff not used, not expired and
# attempts < MAX_ATTEMPTS. Codes are generated with the secrets module.
# 🔗 Dependencies:
# pydantic, secrets, datetime, base, value_objects
# 🔄 Connected Modules / Calls From:
# RegisterUser, VerifyUser, verification code repositories, email services

import secrets
from datetime import datetime, timedelta

from pydantic import Field

from app.modules.authentication.domain.models.base import AggregateRoot, utc_now
from app.modules.authentication.domain.models.value_objects import Email
from app.shared.core.exceptions import InvalidEntityStateError

CODE_LENGTH = 5
MAX_ATTEMPTS = 3
DEFAULT_CODE_TTL = timedelta(minutes=15)


def generate_code(length: int = CODE_LENGTH) -> str:
    """Random decimal code, zero-padded to ``length`` digits."""
    return str(secrets.randbelow(10 ** length)).zfill(length)


class VerificationCode(AggregateRoot):
    email: Email
    code: str = Field(pattern=r"^\d{5}$")
    expires_at: datetime
    is_used: bool = False
    attempts: int = Field(default=0, ge=0)

    @classmethod
    def create(cls, email: Email, ttl: timedelta = DEFAULT_CODE_TTL) -> "VerificationCode":
        now = utc_now()
        return cls(
            email=email,
            code=generate_code(),
            expires_at=now + ttl,
            created_at=now,
            updated_at=now,
        )

    def is_expired(self) -> bool:
        return utc_now() > self.expires_at

    def is_valid(self) -> bool:
        return not self.is_used and not self.is_expired() and self.attempts < MAX_ATTEMPTS

    def use(self) -> None:
        """
        Consume the code.

        Raises:
            InvalidEntityStateError: If the code is used, expired or out of attempts
        """
        if not self.is_valid():
            raise InvalidEntityStateError("Verification code is not valid", entity="VerificationCode")
        self.is_used = True
        self.touch()

    def increment_attempts(self) -> None:
        self.attempts += 1
        self.touch()
