# 📄 File: app/modules/authentication/domain/services/token_service.py
# 🧭 Purpose (Layman Explanation):
# The contract for issuing the short-lived "access pass" (access token) after login and
# the long-lived random refresh token that a device keeps.
# 🧪 Purpose (Technical Summary):
# Token service interface plus the verified access-token payload. Verification must
# distinguish expired tokens (TokenExpiredError) from otherwise invalid ones
# (InvalidTokenError).
# 🔗 Dependencies:
# abc, pydantic, datetime
# 🔄 Connected Modules / Calls From:
# LoginUser, RefreshToken, bearer dependency, infrastructure/security/token_service_impl.py

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class TokenPayload(BaseModel):
    """Claims of a verified access token."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    session_id: str
    issued_at: datetime
    expires_at: datetime
    issuer: str
    audience: str
    token_id: Optional[str] = None


class TokenService(ABC):
    """Access/refresh token contract."""

    @abstractmethod
    def generate_access_token(self, user_id: str, session_id: str) -> str:
        pass

    @abstractmethod
    def generate_refresh_token(self) -> str:
        """High-entropy opaque token (64 alphanumeric characters)."""
        pass

    @abstractmethod
    def verify_access_token(self, token: str) -> TokenPayload:
        """
        Verify signature, issuer, audience and expiry.

        Raises:
            TokenExpiredError: If the token is past its expiry
            InvalidTokenError: For any other verification failure
        """
        pass

    @abstractmethod
    def verify_refresh_token(self, token: str) -> bool:
        """Shape check only; refresh tokens carry no claims."""
        pass

    @abstractmethod
    def decode_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Claims without verification, or None if the token cannot be parsed."""
        pass

    @abstractmethod
    def get_token_expiration_time(self, token: str) -> int:
        """Seconds until the token expires, never negative."""
        pass

    @property
    @abstractmethod
    def access_token_ttl_seconds(self) -> int:
        pass
