# 📄 File: app/modules/authentication/application/commands/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the input packets each action receives.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting command models.
# 🔗 Dependencies:
# Command modules
# 🔄 Connected Modules / Calls From:
# Use cases, API routes, maintenance tasks, tests

from .login_user import DeviceMetaData, LoginUserCommand
from .logout import ListSessionsCommand, LogoutAllCommand, LogoutCommand
from .maintenance import MaintenanceCommand, RevokeExcessSessionsCommand
from .refresh_token import RefreshTokenCommand
from .register_user import RegisterUserCommand
from .verify_user import VerifyUserCommand

__all__ = [
    "DeviceMetaData",
    "LoginUserCommand",
    "ListSessionsCommand",
    "LogoutAllCommand",
    "LogoutCommand",
    "MaintenanceCommand",
    "RevokeExcessSessionsCommand",
    "RefreshTokenCommand",
    "RegisterUserCommand",
    "VerifyUserCommand",
]
