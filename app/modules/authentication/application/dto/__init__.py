# 📄 File: app/modules/authentication/application/dto/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the result packets each action hands back.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting use case result DTOs.
# 🔗 Dependencies:
# auth_dto
# 🔄 Connected Modules / Calls From:
# Use cases, API routes, tests

from .auth_dto import (
    AuthenticatedUserDTO,
    ListSessionsResult,
    LoginUserResult,
    LogoutAllResult,
    LogoutResult,
    MaintenanceResult,
    RefreshTokenResult,
    RegisterUserResult,
    SessionDTO,
    VerifyUserResult,
)

__all__ = [
    "AuthenticatedUserDTO",
    "ListSessionsResult",
    "LoginUserResult",
    "LogoutAllResult",
    "LogoutResult",
    "MaintenanceResult",
    "RefreshTokenResult",
    "RegisterUserResult",
    "SessionDTO",
    "VerifyUserResult",
]
