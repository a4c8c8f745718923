# 📄 File: app/modules/authentication/domain/repositories/session_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how logged-in device sessions are stored, looked up, revoked and cleaned up.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Session aggregate. Storage must guarantee at most one
# active session per (user_id, device_id) and globally unique refresh tokens, and must
# reject stale-version updates.
# 🔗 Dependencies:
# Domain models (Session), typing, abc
# 🔄 Connected Modules / Calls From:
# LoginUser, RefreshToken, Logout/LogoutAll, maintenance use cases, implementations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.session import Session


class SessionRepository(ABC):
    """
    Repository interface for Session entity data access operations.

    "Active" in the lookups below means status active AND not yet expired.
    """

    @abstractmethod
    async def save(self, session: Session) -> Session:
        """
        Insert a new session.

        Raises:
            ConcurrentModificationError: If an active session already exists for
                the same (user_id, device_id) or the refresh token collides
        """
        pass

    @abstractmethod
    async def find_by_id(self, session_id: str) -> Optional[Session]:
        """Get a session by ID regardless of status."""
        pass

    @abstractmethod
    async def find_by_refresh_token(
        self,
        refresh_token: str,
        include_inactive: bool = False,
    ) -> Optional[Session]:
        """
        Get the active session holding this refresh token.

        Args:
            refresh_token: Opaque refresh token
            include_inactive: Also return revoked or expired sessions, so
                callers can tell an ended session from an unknown token

        Returns:
            Session if the token belongs to an active, unexpired session
            (or to any session when include_inactive is set)
        """
        pass

    @abstractmethod
    async def find_active_by_user_id(self, user_id: str) -> List[Session]:
        """
        Get a user's active sessions, most recently accessed first.
        """
        pass

    @abstractmethod
    async def find_by_user_id_and_device_id(self, user_id: str, device_id: str) -> Optional[Session]:
        """Get the active session for one device of a user."""
        pass

    @abstractmethod
    async def update(self, session: Session) -> Session:
        """
        Persist changes to an existing session.

        Raises:
            SessionNotFoundError: If the session does not exist
            ConcurrentModificationError: On a stale version or a refresh token collision
        """
        pass

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: str) -> int:
        """
        Revoke every active session of a user.

        Returns:
            Number of sessions revoked
        """
        pass

    @abstractmethod
    async def revoke_oldest_sessions(self, user_id: str, keep_count: int) -> int:
        """
        Revoke active sessions beyond the ``keep_count`` most recently accessed.

        Returns:
            Number of sessions revoked
        """
        pass

    @abstractmethod
    async def count_active_by_user_id(self, user_id: str) -> int:
        pass

    @abstractmethod
    async def delete_expired(self) -> int:
        """
        Physically remove sessions that are expired or revoked.

        Returns:
            Number of sessions deleted
        """
        pass

    @abstractmethod
    async def find_expiring_sessions_in_next(self, minutes: int) -> List[Session]:
        """Get active sessions whose expiry falls within the next ``minutes``."""
        pass
