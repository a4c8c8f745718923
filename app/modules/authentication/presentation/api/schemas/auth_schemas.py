# 📄 File: app/modules/authentication/presentation/api/schemas/auth_schemas.py
# 🧭 Purpose (Layman Explanation):
# This file defines the shape of the JSON that clients send to and receive from the
# authentication endpoints (sign up, verify, log in, refresh, log out).
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas with camelCase aliases. Request schemas convert to
# application commands; response schemas are built from application result DTOs.
#
# 🔗 Dependencies:
# - pydantic (BaseModel, alias generator)
# - app.modules.authentication.application (commands and DTOs)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.authentication.presentation.api.v1.auth (endpoints)
# - FastAPI request validation and OpenAPI generation

"""
Authentication API Schemas

Request Schemas:
- RegisterRequest, VerifyRequest, LoginRequest, RefreshRequest, LogoutRequest

Response Schemas:
- RegisterResponse, VerifyResponse, LoginResponse, RefreshResponse,
  LogoutResponse, LogoutAllResponse, SessionListResponse, ErrorResponse

Field names are camelCase on the wire (``tenantType``, ``deviceId``) and
snake_case in Python; both spellings are accepted on input.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from app.modules.authentication.application.commands import (
    DeviceMetaData,
    LoginUserCommand,
    LogoutCommand,
    RefreshTokenCommand,
    RegisterUserCommand,
    VerifyUserCommand,
)
from app.modules.authentication.application.dto import (
    ListSessionsResult,
    LoginUserResult,
    LogoutAllResult,
    LogoutResult,
    RefreshTokenResult,
    RegisterUserResult,
    VerifyUserResult,
)


class CamelModel(BaseModel):
    """Base schema serializing to camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class RegisterRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ana.perez@example.com",
                "phone": "+573001234567",
                "name": "Ana Pérez",
                "country": "Colombia",
                "city": "Bogotá",
                "password": "Str0ng!Passw0rd",
                "tenantType": "professional",
            }
        }
    )

    email: str = Field(..., min_length=1, max_length=320)
    phone: str = Field(..., min_length=1, max_length=32)
    name: str = Field(..., min_length=1, max_length=200)
    country: str = Field(..., min_length=1, max_length=100)
    city: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=256)
    tenant_type: str = Field(..., min_length=1, description="professional or company")

    def to_command(self) -> RegisterUserCommand:
        return RegisterUserCommand(**self.model_dump())


class VerifyRequest(CamelModel):
    code: str = Field(..., min_length=1, max_length=16, description="5-digit code from the email")

    def to_command(self) -> VerifyUserCommand:
        return VerifyUserCommand(code=self.code)


class DeviceMetaRequest(CamelModel):
    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    platform: Optional[str] = Field(default=None, max_length=100)
    browser: Optional[str] = Field(default=None, max_length=100)
    os: Optional[str] = Field(default=None, max_length=100)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=256)
    device_id: str = Field(..., min_length=1, max_length=255)
    device_meta: DeviceMetaRequest = Field(default_factory=DeviceMetaRequest)

    def to_command(self, client_ip: str, user_agent: Optional[str]) -> LoginUserCommand:
        """Build the command, filling device details the client left out."""
        meta = self.device_meta
        return LoginUserCommand(
            email=self.email,
            password=self.password,
            device_id=self.device_id,
            device_meta=DeviceMetaData(
                user_agent=meta.user_agent or user_agent or "unknown",
                ip_address=meta.ip_address or client_ip,
                platform=meta.platform,
                browser=meta.browser,
                os=meta.os,
            ),
        )


class RefreshRequest(CamelModel):
    refresh_token: str = Field(default="", max_length=256)

    def to_command(self) -> RefreshTokenCommand:
        return RefreshTokenCommand(refresh_token=self.refresh_token)


class LogoutRequest(CamelModel):
    session_id: Optional[str] = None
    refresh_token: Optional[str] = None
    device_id: Optional[str] = None
    user_id: Optional[str] = None

    @model_validator(mode="after")
    def check_identifier(self) -> "LogoutRequest":
        if not (self.session_id or self.refresh_token or self.device_id):
            raise ValueError("Provide sessionId, refreshToken, or deviceId")
        return self

    def to_command(self, authenticated_user_id: Optional[str] = None) -> LogoutCommand:
        return LogoutCommand(
            session_id=self.session_id,
            refresh_token=self.refresh_token,
            device_id=self.device_id,
            user_id=authenticated_user_id or self.user_id,
        )


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class RegisterResponse(CamelModel):
    success: bool
    message: str
    user_id: str

    @classmethod
    def from_result(cls, result: RegisterUserResult) -> "RegisterResponse":
        return cls(**result.model_dump())


class VerifyResponse(CamelModel):
    success: bool
    message: str
    user_id: str

    @classmethod
    def from_result(cls, result: VerifyUserResult) -> "VerifyResponse":
        return cls(**result.model_dump())


class UserResponse(CamelModel):
    id: str
    email: str
    name: str
    tenant_type: str
    status: str


class LoginResponse(CamelModel):
    success: bool
    message: str
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    session_id: str
    user: UserResponse

    @classmethod
    def from_result(cls, result: LoginUserResult) -> "LoginResponse":
        return cls(
            success=result.success,
            message=result.message,
            access_token=result.access_token,
            refresh_token=result.refresh_token,
            expires_in=result.expires_in,
            session_id=result.session_id,
            user=UserResponse(**result.user.model_dump()),
        )


class RefreshResponse(CamelModel):
    success: bool
    message: str
    access_token: str
    token_type: str = "bearer"
    expires_in: int

    @classmethod
    def from_result(cls, result: RefreshTokenResult) -> "RefreshResponse":
        return cls(**result.model_dump())


class LogoutResponse(CamelModel):
    success: bool
    message: str
    session_id: str

    @classmethod
    def from_result(cls, result: LogoutResult) -> "LogoutResponse":
        return cls(**result.model_dump())


class LogoutAllResponse(CamelModel):
    success: bool
    message: str
    revoked_count: int

    @classmethod
    def from_result(cls, result: LogoutAllResult) -> "LogoutAllResponse":
        return cls(**result.model_dump())


class SessionResponse(CamelModel):
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


class SessionListResponse(CamelModel):
    sessions: List[SessionResponse]
    max_sessions: int

    @classmethod
    def from_result(cls, result: ListSessionsResult) -> "SessionListResponse":
        return cls(
            sessions=[SessionResponse(**s.model_dump()) for s in result.sessions],
            max_sessions=result.max_sessions,
        )


class ErrorResponse(BaseModel):
    """Body of every error response."""

    status: int
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
