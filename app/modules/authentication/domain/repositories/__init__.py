# 📄 File: app/modules/authentication/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the data access contracts for users, sessions and verification codes.
# 🧪 Purpose (Technical Summary):
# Package initialization for repository interfaces (dependency inversion boundary).
# 🔗 Dependencies:
# Repository interface classes
# 🔄 Connected Modules / Calls From:
# Use cases, container, infrastructure implementations

from .session_repository import SessionRepository
from .user_repository import UserRepository
from .verification_code_repository import VerificationCodeRepository

__all__ = ["SessionRepository", "UserRepository", "VerificationCodeRepository"]
