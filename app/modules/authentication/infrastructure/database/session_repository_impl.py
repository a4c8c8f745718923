# 📄 File: app/modules/authentication/infrastructure/database/session_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Stores logged-in device sessions in the database, and lets the service find, refresh,
# log out and clean them up.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of SessionRepository. One active session per
# (user_id, device_id) and unique refresh tokens are enforced by indexes; violations
# surface as ConcurrentModificationError. Updates are compare-and-swap on version and
# bulk status changes bump the version of every touched row.
#
# 🔗 Dependencies:
# - app.modules.authentication.domain.repositories.session_repository (interface)
# - app.modules.authentication.infrastructure.database.models (SessionModel)
# - app.shared.infrastructure.database.repository (transaction helper)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.authentication.container (database storage backend)

import logging
from datetime import timedelta
from typing import List, Optional

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError

from app.modules.authentication.domain.models import (
    DeviceMeta,
    Session,
    SessionStatus,
    utc_now,
)
from app.modules.authentication.domain.repositories import SessionRepository
from app.modules.authentication.infrastructure.database.models import SessionModel
from app.shared.core.exceptions import ConcurrentModificationError, SessionNotFoundError
from app.shared.infrastructure.database.repository import SQLAlchemyRepository

logger = logging.getLogger(__name__)


def _active_clause():
    return and_(
        SessionModel.status == SessionStatus.ACTIVE.value,
        SessionModel.expires_at > utc_now(),
    )


class SessionRepositoryImpl(SQLAlchemyRepository, SessionRepository):
    """
    SQLAlchemy implementation of the SessionRepository interface.
    """

    entity_name = "Session"

    async def save(self, session: Session) -> Session:
        """
        Insert a session, first retiring time-expired rows for the same device.

        Raises:
            ConcurrentModificationError: If a live session exists for the device
                or the refresh token is already taken
        """
        try:
            async with self.transaction("create") as db:
                await db.execute(
                    update(SessionModel)
                    .where(
                        and_(
                            SessionModel.user_id == session.user_id,
                            SessionModel.device_id == session.device_id,
                            SessionModel.status == SessionStatus.ACTIVE.value,
                            SessionModel.expires_at <= utc_now(),
                        )
                    )
                    .values(
                        status=SessionStatus.EXPIRED.value,
                        updated_at=utc_now(),
                        version=SessionModel.version + 1,
                    )
                    .execution_options(synchronize_session=False)
                )
                db.add(self._domain_to_model(session))
                await db.flush()
        except IntegrityError as e:
            logger.warning(
                f"Session insert rejected for user {session.user_id} device {session.device_id}"
            )
            raise ConcurrentModificationError(
                self.entity_name, session.id, details={"field": "device_id|refresh_token"}
            ) from e

        session.mark_persisted()
        logger.info(f"Created session {session.id} for user {session.user_id}")
        return session

    async def find_by_id(self, session_id: str) -> Optional[Session]:
        async with self.transaction("find") as db:
            model = await db.get(SessionModel, session_id)
        return self._model_to_domain(model) if model else None

    async def find_by_refresh_token(
        self,
        refresh_token: str,
        include_inactive: bool = False,
    ) -> Optional[Session]:
        stmt = select(SessionModel).where(SessionModel.refresh_token == refresh_token)
        if not include_inactive:
            stmt = stmt.where(_active_clause())

        async with self.transaction("find") as db:
            model = (await db.execute(stmt)).scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    async def find_active_by_user_id(self, user_id: str) -> List[Session]:
        async with self.transaction("find") as db:
            result = await db.execute(
                select(SessionModel)
                .where(and_(SessionModel.user_id == user_id, _active_clause()))
                .order_by(SessionModel.last_access_at.desc())
            )
            models = result.scalars().all()
        return [self._model_to_domain(model) for model in models]

    async def find_by_user_id_and_device_id(self, user_id: str, device_id: str) -> Optional[Session]:
        async with self.transaction("find") as db:
            result = await db.execute(
                select(SessionModel).where(
                    and_(
                        SessionModel.user_id == user_id,
                        SessionModel.device_id == device_id,
                        _active_clause(),
                    )
                )
            )
            model = result.scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    async def update(self, session: Session) -> Session:
        expected = session.expected_version()
        try:
            async with self.transaction("update") as db:
                result = await db.execute(
                    update(SessionModel)
                    .where(and_(SessionModel.id == session.id, SessionModel.version == expected))
                    .values(**self._mutable_columns(session))
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    if await db.get(SessionModel, session.id) is None:
                        raise SessionNotFoundError()
                    raise ConcurrentModificationError(self.entity_name, session.id, expected)
        except IntegrityError as e:
            raise ConcurrentModificationError(
                self.entity_name, session.id, details={"field": "refresh_token"}
            ) from e

        session.mark_persisted()
        logger.debug(f"Updated session {session.id} to v{session.version}")
        return session

    async def delete(self, session_id: str) -> None:
        async with self.transaction("delete") as db:
            await db.execute(delete(SessionModel).where(SessionModel.id == session_id))

    async def revoke_all_by_user_id(self, user_id: str) -> int:
        async with self.transaction("revoke") as db:
            result = await db.execute(
                self._revoke_statement().where(
                    and_(
                        SessionModel.user_id == user_id,
                        SessionModel.status == SessionStatus.ACTIVE.value,
                    )
                )
            )
        logger.info(f"Revoked {result.rowcount} sessions for user {user_id}")
        return result.rowcount

    async def revoke_oldest_sessions(self, user_id: str, keep_count: int) -> int:
        async with self.transaction("revoke") as db:
            result = await db.execute(
                select(SessionModel.id)
                .where(and_(SessionModel.user_id == user_id, _active_clause()))
                .order_by(SessionModel.last_access_at.desc())
                .offset(keep_count)
            )
            excess_ids = list(result.scalars().all())
            if not excess_ids:
                return 0
            await db.execute(self._revoke_statement().where(SessionModel.id.in_(excess_ids)))

        logger.info(f"Revoked {len(excess_ids)} excess sessions for user {user_id}")
        return len(excess_ids)

    async def count_active_by_user_id(self, user_id: str) -> int:
        async with self.transaction("count") as db:
            result = await db.execute(
                select(func.count())
                .select_from(SessionModel)
                .where(and_(SessionModel.user_id == user_id, _active_clause()))
            )
            return result.scalar_one()

    async def delete_expired(self) -> int:
        async with self.transaction("cleanup") as db:
            result = await db.execute(
                delete(SessionModel).where(
                    or_(
                        SessionModel.status != SessionStatus.ACTIVE.value,
                        SessionModel.expires_at <= utc_now(),
                    )
                )
            )
        return result.rowcount

    async def find_expiring_sessions_in_next(self, minutes: int) -> List[Session]:
        now = utc_now()
        async with self.transaction("find") as db:
            result = await db.execute(
                select(SessionModel).where(
                    and_(
                        SessionModel.status == SessionStatus.ACTIVE.value,
                        SessionModel.expires_at > now,
                        SessionModel.expires_at <= now + timedelta(minutes=minutes),
                    )
                )
            )
            models = result.scalars().all()
        return [self._model_to_domain(model) for model in models]

    # =========================================================================
    # MAPPING
    # =========================================================================

    @staticmethod
    def _revoke_statement():
        return (
            update(SessionModel)
            .values(
                status=SessionStatus.REVOKED.value,
                updated_at=utc_now(),
                version=SessionModel.version + 1,
            )
            .execution_options(synchronize_session=False)
        )

    @staticmethod
    def _mutable_columns(session: Session) -> dict:
        return {
            "device_meta": session.device_meta.model_dump(),
            "status": session.status.value,
            "expires_at": session.expires_at,
            "refresh_token": session.refresh_token,
            "last_access_at": session.last_access_at,
            "updated_at": session.updated_at,
            "version": session.version,
        }

    def _domain_to_model(self, session: Session) -> SessionModel:
        return SessionModel(
            id=session.id,
            user_id=session.user_id,
            device_id=session.device_id,
            created_at=session.created_at,
            **self._mutable_columns(session),
        )

    def _model_to_domain(self, model: SessionModel) -> Session:
        session = Session(
            id=model.id,
            user_id=model.user_id,
            device_id=model.device_id,
            device_meta=DeviceMeta(**model.device_meta),
            status=SessionStatus(model.status),
            expires_at=model.expires_at,
            refresh_token=model.refresh_token,
            last_access_at=model.last_access_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )
        session.mark_persisted()
        return session
