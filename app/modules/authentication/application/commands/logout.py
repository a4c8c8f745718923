# 📄 File: app/modules/authentication/application/commands/logout.py
# 🧭 Purpose (Layman Explanation):
# What is needed to log out one device (by session, refresh token or device) or to log
# out every device of a user at once.
# 🧪 Purpose (Technical Summary):
# Command records for LogoutUseCase, LogoutAllUseCase and ListSessionsUseCase.
# LogoutCommand identifiers are resolved in priority order: session_id, refresh_token,
# then device_id together with user_id.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# application.use_cases.logout, presentation.api.v1.auth

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class LogoutCommand(BaseModel):
    """
    Command for revoking a single session.

    ``user_id`` is required with ``device_id``; with the other identifiers
    it restricts the lookup to sessions owned by that user.
    """

    model_config = ConfigDict(frozen=True)

    session_id: Optional[str] = None
    refresh_token: Optional[str] = None
    device_id: Optional[str] = None
    user_id: Optional[str] = None

    @model_validator(mode="after")
    def check_identifier(self) -> "LogoutCommand":
        if not (self.session_id or self.refresh_token or (self.device_id and self.user_id)):
            raise ValueError("Provide session_id, refresh_token, or device_id with user_id")
        return self


class LogoutAllCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str


class ListSessionsCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    current_session_id: Optional[str] = None
