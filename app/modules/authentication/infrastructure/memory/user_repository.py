# 📄 File: app/modules/authentication/infrastructure/memory/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Keeps user accounts in memory, making sure two accounts never share an email.
# 🧪 Purpose (Technical Summary):
# In-memory UserRepository with atomic email uniqueness and version-checked updates.
# 🔗 Dependencies:
# InMemoryStore, domain models
# 🔄 Connected Modules / Calls From:
# container.py, tests

import logging
from typing import List, Optional

from app.modules.authentication.domain.models import (
    Email,
    TenantType,
    User,
    UserStatus,
    utc_now,
)
from app.modules.authentication.domain.repositories import UserRepository
from app.modules.authentication.infrastructure.memory.store import InMemoryStore
from app.shared.core.exceptions import UserAlreadyExistsError, UserNotFoundError

logger = logging.getLogger(__name__)


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._store: InMemoryStore[User] = InMemoryStore("User", UserNotFoundError)

    async def find_by_email(self, email: Email) -> Optional[User]:
        for user in self._store.values():
            if user.email == email:
                return self._store.snapshot(user)
        return None

    async def find_by_id(self, user_id: str) -> Optional[User]:
        user = self._store.items.get(user_id)
        return self._store.snapshot(user) if user else None

    async def save(self, user: User) -> User:
        async with self._store.lock:
            if any(existing.email == user.email for existing in self._store.values()):
                raise UserAlreadyExistsError(user.email.value)
            self._store.insert(user)
        logger.debug(f"Stored user {user.id}")
        return user

    async def update(self, user: User) -> User:
        async with self._store.lock:
            self._store.check_version(user)
            return self._store.replace(user)

    async def delete(self, user_id: str) -> None:
        async with self._store.lock:
            user = self._store.items.get(user_id)
            if user is not None:
                user.mark_as_deleted()

    async def exists_by_email(self, email: Email) -> bool:
        return any(user.email == email for user in self._store.values())

    async def count_active_by_tenant_type(self, tenant_type: TenantType) -> int:
        return sum(
            1
            for user in self._store.values()
            if user.tenant_type == tenant_type and user.status == UserStatus.ACTIVE
        )

    async def find_locked_users_to_unlock(self) -> List[User]:
        now = utc_now()
        return [
            self._store.snapshot(user)
            for user in self._store.values()
            if user.status == UserStatus.ACTIVE
            and user.locked_until is not None
            and user.locked_until < now
        ]
