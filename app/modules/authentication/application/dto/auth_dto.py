# 📄 File: app/modules/authentication/application/dto/auth_dto.py
# 🧭 Purpose (Layman Explanation):
# Standard answer packets returned after signing up, verifying, logging in, refreshing
# and logging out. Passwords and hashes never appear here.
#
# 🧪 Purpose (Technical Summary):
# Result data transfer objects for the authentication use cases, with factory helpers
# that map domain entities to safe representations.
#
# 🔗 Dependencies:
# - pydantic for DTO structure
# - app.modules.authentication.domain.models (User, Session)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.authentication.application.use_cases
# - app.modules.authentication.presentation.api (response schema conversion)

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.modules.authentication.domain.models import Session, User


class AuthenticatedUserDTO(BaseModel):
    """Public view of the user returned on login."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str
    tenant_type: str
    status: str

    @classmethod
    def from_domain(cls, user: User) -> "AuthenticatedUserDTO":
        return cls(
            id=user.id,
            email=user.email.value,
            name=user.name,
            tenant_type=user.tenant_type.value,
            status=user.status.value,
        )


class SessionDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    device_id: str
    user_agent: str
    ip_address: str
    platform: Optional[str] = None
    browser: Optional[str] = None
    os: Optional[str] = None
    last_access_at: datetime
    expires_at: datetime
    created_at: datetime
    current: bool = False

    @classmethod
    def from_domain(cls, session: Session, current_session_id: Optional[str] = None) -> "SessionDTO":
        meta = session.device_meta
        return cls(
            id=session.id,
            device_id=session.device_id,
            user_agent=meta.user_agent,
            ip_address=meta.ip_address,
            platform=meta.platform,
            browser=meta.browser,
            os=meta.os,
            last_access_at=session.last_access_at,
            expires_at=session.expires_at,
            created_at=session.created_at,
            current=session.id == current_session_id,
        )


class RegisterUserResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    user_id: str


class VerifyUserResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    user_id: str


class LoginUserResult(BaseModel):
    """
    Tokens and user summary returned on login.

    ``session_id`` identifies the device session the tokens are bound to;
    it is the same id when a device logs in again.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    access_token: str
    refresh_token: str
    expires_in: int
    session_id: str
    user: AuthenticatedUserDTO

    def __repr__(self) -> str:
        return f"LoginUserResult(session_id={self.session_id!r}, message={self.message!r})"


class RefreshTokenResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    access_token: str
    expires_in: int


class LogoutResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    session_id: str


class LogoutAllResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    revoked_count: int


class ListSessionsResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    sessions: List[SessionDTO]
    max_sessions: int


class MaintenanceResult(BaseModel):
    """Outcome of one housekeeping run."""

    model_config = ConfigDict(frozen=True)

    task: str
    affected: int
    skipped: int = 0
