# 📄 File: app/modules/authentication/infrastructure/memory/session_repository.py
# 🧭 Purpose (Layman Explanation):
# Keeps device sessions in memory and guarantees one live session per device and no
# two sessions with the same refresh token.
# 🧪 Purpose (Technical Summary):
# In-memory SessionRepository. Uniqueness of active (user_id, device_id) and of
# refresh_token is checked under the store lock, so concurrent inserts cannot both win.
# 🔗 Dependencies:
# InMemoryStore, domain models
# 🔄 Connected Modules / Calls From:
# container.py, tests

from datetime import timedelta
from typing import List, Optional

from app.modules.authentication.domain.models import Session, SessionStatus, utc_now
from app.modules.authentication.domain.repositories import SessionRepository
from app.modules.authentication.infrastructure.memory.store import InMemoryStore
from app.shared.core.exceptions import ConcurrentModificationError, SessionNotFoundError


class InMemorySessionRepository(SessionRepository):
    def __init__(self):
        self._store: InMemoryStore[Session] = InMemoryStore("Session", SessionNotFoundError)

    def _active(self) -> List[Session]:
        return [s for s in self._store.values() if s.is_active()]

    def _check_refresh_token_free(self, session: Session) -> None:
        for other in self._store.values():
            if other.id != session.id and other.refresh_token == session.refresh_token:
                raise ConcurrentModificationError("Session", session.id, details={"field": "refresh_token"})

    async def save(self, session: Session) -> Session:
        async with self._store.lock:
            for other in self._store.values():
                if (
                    other.status == SessionStatus.ACTIVE
                    and other.user_id == session.user_id
                    and other.device_id == session.device_id
                ):
                    if not other.is_expired():
                        raise ConcurrentModificationError(
                            "Session", other.id, details={"field": "device_id"}
                        )
                    other.mark_as_expired()
            self._check_refresh_token_free(session)
            return self._store.insert(session)

    async def find_by_id(self, session_id: str) -> Optional[Session]:
        session = self._store.items.get(session_id)
        return self._store.snapshot(session) if session else None

    async def find_by_refresh_token(
        self,
        refresh_token: str,
        include_inactive: bool = False,
    ) -> Optional[Session]:
        for session in self._store.values():
            if session.refresh_token == refresh_token and (include_inactive or session.is_active()):
                return self._store.snapshot(session)
        return None

    async def find_active_by_user_id(self, user_id: str) -> List[Session]:
        sessions = [s for s in self._active() if s.user_id == user_id]
        sessions.sort(key=lambda s: s.last_access_at, reverse=True)
        return [self._store.snapshot(s) for s in sessions]

    async def find_by_user_id_and_device_id(self, user_id: str, device_id: str) -> Optional[Session]:
        for session in self._active():
            if session.user_id == user_id and session.device_id == device_id:
                return self._store.snapshot(session)
        return None

    async def update(self, session: Session) -> Session:
        async with self._store.lock:
            self._store.check_version(session)
            self._check_refresh_token_free(session)
            return self._store.replace(session)

    async def delete(self, session_id: str) -> None:
        async with self._store.lock:
            self._store.items.pop(session_id, None)

    async def revoke_all_by_user_id(self, user_id: str) -> int:
        async with self._store.lock:
            revoked = 0
            for session in self._store.values():
                if session.user_id == user_id and session.status == SessionStatus.ACTIVE:
                    session.revoke()
                    revoked += 1
            return revoked

    async def revoke_oldest_sessions(self, user_id: str, keep_count: int) -> int:
        async with self._store.lock:
            sessions = [s for s in self._active() if s.user_id == user_id]
            sessions.sort(key=lambda s: s.last_access_at, reverse=True)
            excess = sessions[keep_count:]
            for session in excess:
                session.revoke()
            return len(excess)

    async def count_active_by_user_id(self, user_id: str) -> int:
        return sum(1 for s in self._active() if s.user_id == user_id)

    async def delete_expired(self) -> int:
        async with self._store.lock:
            now = utc_now()
            doomed = [
                s.id for s in self._store.values()
                if s.status != SessionStatus.ACTIVE or s.expires_at <= now
            ]
            for session_id in doomed:
                del self._store.items[session_id]
            return len(doomed)

    async def find_expiring_sessions_in_next(self, minutes: int) -> List[Session]:
        now = utc_now()
        horizon = now + timedelta(minutes=minutes)
        return [
            self._store.snapshot(s)
            for s in self._store.values()
            if s.status == SessionStatus.ACTIVE and now < s.expires_at <= horizon
        ]
