# 📄 File: app/modules/authentication/infrastructure/database/verification_code_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Stores the 5-digit codes emailed at registration and keeps track of how many times
# each was tried and whether it was already used.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of VerificationCodeRepository. Code lookups rank usable
# records (unused and unexpired) first, then the newest. Updates are compare-and-swap
# on the version column.
#
# 🔗 Dependencies:
# - app.modules.authentication.infrastructure.database.models (VerificationCodeModel)
# - app.shared.infrastructure.database.repository (transaction helper)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.authentication.container (database storage backend)

import logging
from typing import List, Optional

from sqlalchemy import and_, case, delete, false, or_, select, update

from app.modules.authentication.domain.models import Email, VerificationCode, utc_now
from app.modules.authentication.domain.repositories import VerificationCodeRepository
from app.modules.authentication.infrastructure.database.models import VerificationCodeModel
from app.shared.core.exceptions import (
    ConcurrentModificationError,
    VerificationCodeNotFoundError,
)
from app.shared.infrastructure.database.repository import SQLAlchemyRepository

logger = logging.getLogger(__name__)


class VerificationCodeRepositoryImpl(SQLAlchemyRepository, VerificationCodeRepository):
    """
    SQLAlchemy implementation of the VerificationCodeRepository interface.
    """

    entity_name = "VerificationCode"

    async def save(self, verification_code: VerificationCode) -> VerificationCode:
        async with self.transaction("create") as db:
            db.add(self._domain_to_model(verification_code))
        verification_code.mark_persisted()
        logger.debug(f"Stored verification code {verification_code.id}")
        return verification_code

    async def find_by_email_and_code(self, email: Email, code: str) -> Optional[VerificationCode]:
        return await self._best_match(
            and_(VerificationCodeModel.email == email.value, VerificationCodeModel.code == code)
        )

    async def find_by_code(self, code: str) -> Optional[VerificationCode]:
        return await self._best_match(VerificationCodeModel.code == code)

    async def find_active_by_email(self, email: Email) -> List[VerificationCode]:
        async with self.transaction("find") as db:
            result = await db.execute(
                select(VerificationCodeModel)
                .where(
                    and_(
                        VerificationCodeModel.email == email.value,
                        VerificationCodeModel.is_used == false(),
                        VerificationCodeModel.expires_at > utc_now(),
                    )
                )
                .order_by(VerificationCodeModel.created_at.desc())
            )
            models = result.scalars().all()
        return [self._model_to_domain(model) for model in models]

    async def update(self, verification_code: VerificationCode) -> VerificationCode:
        expected = verification_code.expected_version()
        async with self.transaction("update") as db:
            result = await db.execute(
                update(VerificationCodeModel)
                .where(
                    and_(
                        VerificationCodeModel.id == verification_code.id,
                        VerificationCodeModel.version == expected,
                    )
                )
                .values(
                    is_used=verification_code.is_used,
                    attempts=verification_code.attempts,
                    updated_at=verification_code.updated_at,
                    version=verification_code.version,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                if await db.get(VerificationCodeModel, verification_code.id) is None:
                    raise VerificationCodeNotFoundError()
                raise ConcurrentModificationError(self.entity_name, verification_code.id, expected)

        verification_code.mark_persisted()
        return verification_code

    async def delete(self, code_id: str) -> None:
        async with self.transaction("delete") as db:
            await db.execute(delete(VerificationCodeModel).where(VerificationCodeModel.id == code_id))

    async def delete_expired(self) -> int:
        async with self.transaction("cleanup") as db:
            result = await db.execute(
                delete(VerificationCodeModel).where(
                    or_(
                        VerificationCodeModel.is_used.is_(True),
                        VerificationCodeModel.expires_at <= utc_now(),
                    )
                )
            )
        return result.rowcount

    async def revoke_all_by_email(self, email: Email) -> int:
        async with self.transaction("revoke") as db:
            result = await db.execute(
                update(VerificationCodeModel)
                .where(
                    and_(
                        VerificationCodeModel.email == email.value,
                        VerificationCodeModel.is_used == false(),
                    )
                )
                .values(
                    is_used=True,
                    updated_at=utc_now(),
                    version=VerificationCodeModel.version + 1,
                )
                .execution_options(synchronize_session=False)
            )
        return result.rowcount

    async def _best_match(self, criteria) -> Optional[VerificationCode]:
        usable_first = case(
            (
                and_(
                    VerificationCodeModel.is_used == false(),
                    VerificationCodeModel.expires_at > utc_now(),
                ),
                1,
            ),
            else_=0,
        )
        async with self.transaction("find") as db:
            result = await db.execute(
                select(VerificationCodeModel)
                .where(criteria)
                .order_by(usable_first.desc(), VerificationCodeModel.created_at.desc())
                .limit(1)
            )
            model = result.scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    def _domain_to_model(self, verification_code: VerificationCode) -> VerificationCodeModel:
        return VerificationCodeModel(
            id=verification_code.id,
            email=verification_code.email.value,
            code=verification_code.code,
            expires_at=verification_code.expires_at,
            is_used=verification_code.is_used,
            attempts=verification_code.attempts,
            created_at=verification_code.created_at,
            updated_at=verification_code.updated_at,
            version=verification_code.version,
        )

    def _model_to_domain(self, model: VerificationCodeModel) -> VerificationCode:
        verification_code = VerificationCode(
            id=model.id,
            email=Email(value=model.email),
            code=model.code,
            expires_at=model.expires_at,
            is_used=model.is_used,
            attempts=model.attempts,
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )
        verification_code.mark_persisted()
        return verification_code
