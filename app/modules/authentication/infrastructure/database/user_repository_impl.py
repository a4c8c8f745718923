# 📄 File: app/modules/authentication/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file handles all database operations for user accounts: creating new users,
# finding existing ones by email or id, and saving changes such as verification,
# failed logins and lockouts.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of UserRepository. Email uniqueness is the users.email
# unique constraint (IntegrityError -> UserAlreadyExistsError). Updates are
# compare-and-swap on the version column.
#
# 🔗 Dependencies:
# - app.modules.authentication.domain.repositories.user_repository (interface)
# - app.modules.authentication.infrastructure.database.models (UserModel)
# - app.shared.infrastructure.database.repository (transaction helper)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.authentication.container (database storage backend)

"""
User Repository Implementation

Maps between domain User entities and UserModel rows. Every method runs in its
own short transaction.
"""

import logging
from typing import List, Optional

from sqlalchemy import and_, func, select, update
from sqlalchemy.exc import IntegrityError

from app.modules.authentication.domain.models import (
    Email,
    Password,
    Phone,
    TenantType,
    User,
    UserStatus,
    utc_now,
)
from app.modules.authentication.domain.repositories import UserRepository
from app.modules.authentication.infrastructure.database.models import UserModel
from app.shared.core.exceptions import (
    ConcurrentModificationError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from app.shared.infrastructure.database.repository import SQLAlchemyRepository

logger = logging.getLogger(__name__)


class UserRepositoryImpl(SQLAlchemyRepository, UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """

    entity_name = "User"

    async def find_by_email(self, email: Email) -> Optional[User]:
        async with self.transaction("find") as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email.value))
            user_model = result.scalar_one_or_none()

        if user_model is None:
            logger.debug("User not found by email")
            return None
        return self._model_to_domain(user_model)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        async with self.transaction("find") as session:
            user_model = await session.get(UserModel, user_id)

        if user_model is None:
            logger.debug(f"User not found: {user_id}")
            return None
        return self._model_to_domain(user_model)

    async def save(self, user: User) -> User:
        """
        Insert a new user.

        Raises:
            UserAlreadyExistsError: If the email is already registered
            RepositoryError: For other database errors
        """
        try:
            async with self.transaction("create") as session:
                session.add(self._domain_to_model(user))
                await session.flush()
        except IntegrityError as e:
            logger.warning(f"User creation failed - email already exists (user {user.id})")
            raise UserAlreadyExistsError(user.email.value) from e

        user.mark_persisted()
        logger.info(f"Created user with ID: {user.id}")
        return user

    async def update(self, user: User) -> User:
        """
        Persist changes if the stored version still matches.

        Raises:
            UserNotFoundError: If the user row is gone
            ConcurrentModificationError: If another writer updated it first
        """
        expected = user.expected_version()
        async with self.transaction("update") as session:
            result = await session.execute(
                update(UserModel)
                .where(and_(UserModel.id == user.id, UserModel.version == expected))
                .values(**self._mutable_columns(user))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                exists = await session.get(UserModel, user.id)
                if exists is None:
                    raise UserNotFoundError()
                logger.warning(
                    f"Stale update on user {user.id}: expected v{expected}, found v{exists.version}"
                )
                raise ConcurrentModificationError(self.entity_name, user.id, expected)

        user.mark_persisted()
        logger.debug(f"Updated user {user.id} to v{user.version}")
        return user

    async def delete(self, user_id: str) -> None:
        async with self.transaction("delete") as session:
            await session.execute(
                update(UserModel)
                .where(UserModel.id == user_id)
                .values(
                    status=UserStatus.DELETED.value,
                    updated_at=utc_now(),
                    version=UserModel.version + 1,
                )
                .execution_options(synchronize_session=False)
            )
        logger.info(f"Soft deleted user {user_id}")

    async def exists_by_email(self, email: Email) -> bool:
        async with self.transaction("find") as session:
            result = await session.execute(
                select(func.count()).select_from(UserModel).where(UserModel.email == email.value)
            )
            return result.scalar_one() > 0

    async def count_active_by_tenant_type(self, tenant_type: TenantType) -> int:
        async with self.transaction("count") as session:
            result = await session.execute(
                select(func.count())
                .select_from(UserModel)
                .where(
                    and_(
                        UserModel.tenant_type == tenant_type.value,
                        UserModel.status == UserStatus.ACTIVE.value,
                    )
                )
            )
            return result.scalar_one()

    async def find_locked_users_to_unlock(self) -> List[User]:
        async with self.transaction("find") as session:
            result = await session.execute(
                select(UserModel).where(
                    and_(
                        UserModel.status == UserStatus.ACTIVE.value,
                        UserModel.locked_until.is_not(None),
                        UserModel.locked_until < utc_now(),
                    )
                )
            )
            models = result.scalars().all()
        return [self._model_to_domain(model) for model in models]

    # =========================================================================
    # MAPPING
    # =========================================================================

    @staticmethod
    def _mutable_columns(user: User) -> dict:
        return {
            "email": user.email.value,
            "hashed_password": user.hashed_password.value,
            "phone": user.phone.value,
            "name": user.name,
            "country": user.country,
            "city": user.city,
            "tenant_type": user.tenant_type.value,
            "status": user.status.value,
            "last_login_at": user.last_login_at,
            "failed_login_attempts": user.failed_login_attempts,
            "locked_until": user.locked_until,
            "updated_at": user.updated_at,
            "version": user.version,
        }

    def _domain_to_model(self, user: User) -> UserModel:
        return UserModel(id=user.id, created_at=user.created_at, **self._mutable_columns(user))

    def _model_to_domain(self, model: UserModel) -> User:
        user = User(
            id=model.id,
            email=Email(value=model.email),
            hashed_password=Password.create_from_hash(model.hashed_password),
            phone=Phone(value=model.phone),
            name=model.name,
            country=model.country,
            city=model.city,
            tenant_type=TenantType(model.tenant_type),
            status=UserStatus(model.status),
            last_login_at=model.last_login_at,
            failed_login_attempts=model.failed_login_attempts,
            locked_until=model.locked_until,
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )
        user.mark_persisted()
        return user
