# 📄 File: app/modules/authentication/infrastructure/memory/verification_code_repository.py
# 🧭 Purpose (Layman Explanation):
# Keeps the emailed verification codes in memory.
# 🧪 Purpose (Technical Summary):
# In-memory VerificationCodeRepository with version-checked updates. Code lookups prefer
# usable records, then the most recently created one.
# 🔗 Dependencies:
# InMemoryStore, domain models
# 🔄 Connected Modules / Calls From:
# container.py, tests

from typing import Iterable, List, Optional

from app.modules.authentication.domain.models import Email, VerificationCode, utc_now
from app.modules.authentication.domain.repositories import VerificationCodeRepository
from app.modules.authentication.infrastructure.memory.store import InMemoryStore
from app.shared.core.exceptions import VerificationCodeNotFoundError


def _unused_and_unexpired(code: VerificationCode) -> bool:
    return not code.is_used and not code.is_expired()


class InMemoryVerificationCodeRepository(VerificationCodeRepository):
    def __init__(self):
        self._store: InMemoryStore[VerificationCode] = InMemoryStore(
            "VerificationCode", VerificationCodeNotFoundError
        )

    def _best_match(self, candidates: Iterable[VerificationCode]) -> Optional[VerificationCode]:
        ranked = sorted(
            candidates,
            key=lambda c: (_unused_and_unexpired(c), c.created_at),
            reverse=True,
        )
        return self._store.snapshot(ranked[0]) if ranked else None

    async def save(self, verification_code: VerificationCode) -> VerificationCode:
        async with self._store.lock:
            return self._store.insert(verification_code)

    async def find_by_email_and_code(self, email: Email, code: str) -> Optional[VerificationCode]:
        return self._best_match(
            c for c in self._store.values() if c.email == email and c.code == code
        )

    async def find_by_code(self, code: str) -> Optional[VerificationCode]:
        return self._best_match(c for c in self._store.values() if c.code == code)

    async def find_active_by_email(self, email: Email) -> List[VerificationCode]:
        codes = [c for c in self._store.values() if c.email == email and _unused_and_unexpired(c)]
        codes.sort(key=lambda c: c.created_at, reverse=True)
        return [self._store.snapshot(c) for c in codes]

    async def update(self, verification_code: VerificationCode) -> VerificationCode:
        async with self._store.lock:
            self._store.check_version(verification_code)
            return self._store.replace(verification_code)

    async def delete(self, code_id: str) -> None:
        async with self._store.lock:
            self._store.items.pop(code_id, None)

    async def delete_expired(self) -> int:
        async with self._store.lock:
            now = utc_now()
            doomed = [c.id for c in self._store.values() if c.is_used or c.expires_at <= now]
            for code_id in doomed:
                del self._store.items[code_id]
            return len(doomed)

    async def revoke_all_by_email(self, email: Email) -> int:
        async with self._store.lock:
            revoked = 0
            for code in self._store.values():
                if code.email == email and not code.is_used:
                    code.is_used = True
                    code.touch()
                    revoked += 1
            return revoked
