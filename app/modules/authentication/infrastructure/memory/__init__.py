# 📄 File: app/modules/authentication/infrastructure/memory/__init__.py
# 🧭 Purpose (Layman Explanation):
# Storage kept in the server's memory, used for development and tests.
# 🧪 Purpose (Technical Summary):
# In-process repository implementations with the same uniqueness and optimistic
# concurrency guarantees as the database backend.
# 🔗 Dependencies:
# asyncio, domain repositories
# 🔄 Connected Modules / Calls From:
# container.py (STORAGE_BACKEND=memory), tests

from .session_repository import InMemorySessionRepository
from .user_repository import InMemoryUserRepository
from .verification_code_repository import InMemoryVerificationCodeRepository

__all__ = [
    "InMemorySessionRepository",
    "InMemoryUserRepository",
    "InMemoryVerificationCodeRepository",
]
