# 📄 File: app/modules/authentication/application/commands/login_user.py
# 🧭 Purpose (Layman Explanation):
# What a device sends to log in: email, password, a stable device identifier and some
# details about the device (browser, IP address...).
# 🧪 Purpose (Technical Summary):
# Command record for LoginUserUseCase with the device metadata captured per session.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# application.use_cases.login_user, presentation.api.v1.auth

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DeviceMetaData(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_agent: str = Field(default="unknown", max_length=512)
    ip_address: str = Field(default="unknown", max_length=64)
    platform: Optional[str] = Field(default=None, max_length=100)
    browser: Optional[str] = Field(default=None, max_length=100)
    os: Optional[str] = Field(default=None, max_length=100)


class LoginUserCommand(BaseModel):
    """Command for credential login from one device."""

    model_config = ConfigDict(frozen=True)

    email: str
    password: str
    device_id: str = Field(..., min_length=1, max_length=255)
    device_meta: DeviceMetaData = Field(default_factory=DeviceMetaData)

    def __repr__(self) -> str:
        return f"LoginUserCommand(device_id={self.device_id!r})"
