# 📄 File: app/modules/authentication/domain/models/session.py
# 🧭 Purpose (Layman Explanation):
# A session is one logged-in device. It remembers which device it belongs to, holds the
# long-lived refresh token for that device, and knows when it expires or was logged out.
# 🧪 Purpose (Technical Summary):
# Session aggregate bound to (user_id, device_id). Refreshed in place on same-device
# re-login (token rotation + expiry extension), revoked on logout, expired by time.
# A revoked or expired session is never reactivated.
# 🔗 Dependencies:
# pydantic, datetime, enum, base
# 🔄 Connected Modules / Calls From:
# LoginUser, RefreshToken, Logout/LogoutAll use cases, session repositories

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.authentication.domain.models.base import AggregateRoot, utc_now
from app.shared.core.exceptions import InvalidEntityStateError

DEFAULT_SESSION_TTL = timedelta(days=7)


class SessionStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"


class DeviceMeta(BaseModel):
    """Client details captured at login time."""

    model_config = ConfigDict(frozen=True)

    user_agent: str
    ip_address: str
    platform: Optional[str] = None
    browser: Optional[str] = None
    os: Optional[str] = None

    def describe(self) -> str:
        """Short label for notifications, e.g. ``Firefox on Linux``."""
        browser = self.browser or "Unknown browser"
        os_name = self.os or "unknown OS"
        return f"{browser} on {os_name}"


class Session(AggregateRoot):
    """
    Device-scoped login session.

    The id never changes; only the refresh token, expiry and access
    timestamps move when the session is refreshed.
    """

    user_id: str
    device_id: str = Field(min_length=1)
    device_meta: DeviceMeta
    status: SessionStatus = SessionStatus.ACTIVE
    expires_at: datetime
    refresh_token: str
    last_access_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def create(
        cls,
        user_id: str,
        device_id: str,
        device_meta: DeviceMeta,
        refresh_token: str,
        ttl: timedelta = DEFAULT_SESSION_TTL,
    ) -> "Session":
        now = utc_now()
        return cls(
            user_id=user_id,
            device_id=device_id,
            device_meta=device_meta,
            refresh_token=refresh_token,
            expires_at=now + ttl,
            last_access_at=now,
            created_at=now,
            updated_at=now,
        )

    def is_expired(self) -> bool:
        return utc_now() > self.expires_at

    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE and not self.is_expired()

    def time_until_expiry(self) -> timedelta:
        remaining = self.expires_at - utc_now()
        return max(remaining, timedelta(0))

    def revoke(self) -> None:
        self.status = SessionStatus.REVOKED
        self.touch()

    def mark_as_expired(self) -> None:
        # Revoked stays revoked
        if self.status == SessionStatus.ACTIVE:
            self.status = SessionStatus.EXPIRED
            self.touch()

    def update_last_access(self) -> None:
        self.last_access_at = utc_now()
        self.touch()

    def update_refresh_token(self, new_token: str, new_expiry: datetime) -> None:
        """
        Rotate the refresh token and extend the session.

        Raises:
            InvalidEntityStateError: If the session is revoked or expired
        """
        if self.status != SessionStatus.ACTIVE:
            raise InvalidEntityStateError(
                f"Cannot rotate the token of a {self.status.value} session",
                entity="Session",
            )
        self.refresh_token = new_token
        self.expires_at = new_expiry
        self.last_access_at = utc_now()
        self.touch()
