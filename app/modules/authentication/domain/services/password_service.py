# 📄 File: app/modules/authentication/domain/services/password_service.py
# 🧭 Purpose (Layman Explanation):
# The contract for scrambling passwords before storing them and checking a typed
# password against the stored scrambled version.
# 🧪 Purpose (Technical Summary):
# Password hashing service interface used by the use cases; the concrete implementation
# lives in the infrastructure layer.
# 🔗 Dependencies:
# abc, value_objects.Password
# 🔄 Connected Modules / Calls From:
# RegisterUser, LoginUser, infrastructure/security/password_service_impl.py

from abc import ABC, abstractmethod

from ..models.value_objects import Password


class PasswordService(ABC):
    """Password hashing contract."""

    @abstractmethod
    async def hash(self, password: Password) -> Password:
        """
        Hash a validated plain-text password.

        Args:
            password: Plain-text Password created with ``Password.create``

        Returns:
            Password wrapping the hash (``is_hashed`` is True)
        """
        pass

    @abstractmethod
    async def verify(self, plain_password: str, hashed_password: Password) -> bool:
        """
        Check a plain-text password against a stored hash.

        Returns:
            True on match; False on mismatch or an unreadable hash
        """
        pass

    @abstractmethod
    def generate_temporary_password(self) -> Password:
        """Random password that satisfies the default policy."""
        pass

    @abstractmethod
    def needs_rehash(self, hashed_password: Password) -> bool:
        """True if the hash was produced with outdated parameters."""
        pass
