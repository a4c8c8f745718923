# 📄 File: app/modules/authentication/presentation/api/schemas/__init__.py
# 🧭 Purpose (Layman Explanation):
# JSON formats of the authentication endpoints.
# 🧪 Purpose (Technical Summary):
# Re-exports request/response schemas.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# presentation/api/v1/auth.py, tests

from .auth_schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LogoutAllResponse,
    LogoutRequest,
    LogoutResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
    SessionListResponse,
    VerifyRequest,
    VerifyResponse,
)

__all__ = [
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutAllResponse",
    "LogoutRequest",
    "LogoutResponse",
    "RefreshRequest",
    "RefreshResponse",
    "RegisterRequest",
    "RegisterResponse",
    "SessionListResponse",
    "VerifyRequest",
    "VerifyResponse",
]
