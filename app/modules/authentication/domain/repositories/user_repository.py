# 📄 File: app/modules/authentication/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save, find and update user accounts without saying
# which database is used.
# 🧪 Purpose (Technical Summary):
# Repository interface for the User aggregate. Implementations enforce email uniqueness
# atomically and make updates conditional on the entity's expected version.
# 🔗 Dependencies:
# Domain models (User, Email), typing, abc
# 🔄 Connected Modules / Calls From:
# Use cases, in-memory and SQLAlchemy implementations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.user import TenantType, User
from ..models.value_objects import Email


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Methods return domain entities (User), not database models
    - Returned entities are marked persisted so ``update`` can check versions
    - Email uniqueness must be enforced by storage, not by check-then-write
    """

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """
        Get user by normalized email address.

        Args:
            email: Email value object

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID to find

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Insert a new user.

        Args:
            user: User entity to insert

        Returns:
            The saved User entity

        Raises:
            UserAlreadyExistsError: If the email is already registered
            RepositoryError: If the storage operation fails
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """
        Persist changes to an existing user.

        Args:
            user: Mutated User entity

        Returns:
            The updated User entity

        Raises:
            UserNotFoundError: If the user does not exist
            ConcurrentModificationError: If the stored version differs from
                the version the entity was loaded with
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """
        Soft delete a user (status becomes deleted).

        Args:
            user_id: User ID to delete
        """
        pass

    @abstractmethod
    async def exists_by_email(self, email: Email) -> bool:
        pass

    @abstractmethod
    async def count_active_by_tenant_type(self, tenant_type: TenantType) -> int:
        pass

    @abstractmethod
    async def find_locked_users_to_unlock(self) -> List[User]:
        """
        Get active users whose lock period has already elapsed.

        Returns:
            List of users with ``locked_until`` in the past
        """
        pass
