# 📄 File: app/modules/authentication/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Database-backed storage for users, sessions and verification codes.
# 🧪 Purpose (Technical Summary):
# Exports the SQLAlchemy repository implementations and ORM models.
# 🔗 Dependencies:
# SQLAlchemy
# 🔄 Connected Modules / Calls From:
# container.py, tests

from .models import SessionModel, UserModel, VerificationCodeModel
from .session_repository_impl import SessionRepositoryImpl
from .user_repository_impl import UserRepositoryImpl
from .verification_code_repository_impl import VerificationCodeRepositoryImpl

__all__ = [
    "SessionModel",
    "UserModel",
    "VerificationCodeModel",
    "SessionRepositoryImpl",
    "UserRepositoryImpl",
    "VerificationCodeRepositoryImpl",
]
