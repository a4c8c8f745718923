# 📄 File: app/modules/authentication/infrastructure/security/__init__.py
# 🧭 Purpose (Layman Explanation):
# Password hashing and login token tools.
# 🧪 Purpose (Technical Summary):
# Exports the passlib/argon2 PasswordService and python-jose TokenService.
# 🔗 Dependencies:
# passlib, argon2-cffi, python-jose
# 🔄 Connected Modules / Calls From:
# container.py, tests

from .password_service_impl import Argon2PasswordService
from .token_service_impl import JWTTokenService

__all__ = ["Argon2PasswordService", "JWTTokenService"]
