# 📄 File: app/modules/authentication/application/use_cases/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the actions of the authentication service.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting every use case.
# 🔗 Dependencies:
# Use case modules
# 🔄 Connected Modules / Calls From:
# container.py, tests

from .base import UseCase, notify_best_effort
from .login_user import LoginUserUseCase
from .logout import ListSessionsUseCase, LogoutAllUseCase, LogoutUseCase
from .maintenance import (
    CleanupExpiredSessionsUseCase,
    CleanupExpiredVerificationCodesUseCase,
    RevokeExcessSessionsUseCase,
    UnlockExpiredLockoutsUseCase,
)
from .refresh_token import RefreshTokenUseCase
from .register_user import RegisterUserUseCase
from .verify_user import VerifyUserUseCase

__all__ = [
    "UseCase",
    "notify_best_effort",
    "LoginUserUseCase",
    "ListSessionsUseCase",
    "LogoutAllUseCase",
    "LogoutUseCase",
    "CleanupExpiredSessionsUseCase",
    "CleanupExpiredVerificationCodesUseCase",
    "RevokeExcessSessionsUseCase",
    "UnlockExpiredLockoutsUseCase",
    "RefreshTokenUseCase",
    "RegisterUserUseCase",
    "VerifyUserUseCase",
]
