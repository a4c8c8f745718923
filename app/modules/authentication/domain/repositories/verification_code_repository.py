# 📄 File: app/modules/authentication/domain/repositories/verification_code_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how the emailed verification codes are stored, found and thrown away.
# 🧪 Purpose (Technical Summary):
# Repository interface for the VerificationCode aggregate with version-checked updates.
# 🔗 Dependencies:
# Domain models (VerificationCode, Email), typing, abc
# 🔄 Connected Modules / Calls From:
# RegisterUser, VerifyUser, maintenance use cases, implementations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.value_objects import Email
from ..models.verification_code import VerificationCode


class VerificationCodeRepository(ABC):
    """
    Repository interface for VerificationCode entity data access operations.

    Code lookups return used or expired records too, so callers can tell an
    expired code from a wrong one. When several records share a code, the
    unused and unexpired ones win, then the most recently created.
    """

    @abstractmethod
    async def save(self, verification_code: VerificationCode) -> VerificationCode:
        pass

    @abstractmethod
    async def find_by_email_and_code(self, email: Email, code: str) -> Optional[VerificationCode]:
        pass

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[VerificationCode]:
        pass

    @abstractmethod
    async def find_active_by_email(self, email: Email) -> List[VerificationCode]:
        """
        Get unused, unexpired codes for an email, newest first.
        """
        pass

    @abstractmethod
    async def update(self, verification_code: VerificationCode) -> VerificationCode:
        """
        Persist changes to an existing code.

        Raises:
            VerificationCodeNotFoundError: If the code does not exist
            ConcurrentModificationError: If the stored version is stale
        """
        pass

    @abstractmethod
    async def delete(self, code_id: str) -> None:
        pass

    @abstractmethod
    async def delete_expired(self) -> int:
        """
        Physically remove codes that are expired or used.

        Returns:
            Number of codes deleted
        """
        pass

    @abstractmethod
    async def revoke_all_by_email(self, email: Email) -> int:
        """
        Mark every unused code for an email as used.

        Returns:
            Number of codes revoked
        """
        pass
