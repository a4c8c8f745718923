# 📄 File: app/modules/authentication/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is in the authentication service: who they are, whether their
# account is verified, suspended or temporarily locked after too many wrong passwords.
# 🧪 Purpose (Technical Summary):
# User aggregate root. Status transitions happen only through the lifecycle methods below;
# every mutator bumps updated_at and version. Implements the failed-login lockout policy.
# 🔗 Dependencies:
# pydantic, datetime, enum, value_objects, base
# 🔄 Connected Modules / Calls From:
# RegisterUser, VerifyUser, LoginUser, maintenance use cases, user repositories

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import Field

from app.modules.authentication.domain.models.base import AggregateRoot, utc_now
from app.modules.authentication.domain.models.value_objects import Email, Password, Phone
from app.shared.core.exceptions import InvalidTenantTypeError

DEFAULT_MAX_FAILED_ATTEMPTS = 5
DEFAULT_LOCK_DURATION = timedelta(minutes=30)


class TenantType(str, Enum):
    """Kind of account holder"""
    PROFESSIONAL = "professional"
    COMPANY = "company"

    @classmethod
    def parse(cls, raw: str) -> "TenantType":
        """
        Resolve a tenant type, accepting the Spanish aliases used by clients.

        Raises:
            InvalidTenantTypeError: If the value is not a known tenant type
        """
        if isinstance(raw, str):
            key = raw.strip().lower()
            key = TENANT_TYPE_ALIASES.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        raise InvalidTenantTypeError(raw)


TENANT_TYPE_ALIASES = {
    "profesional": TenantType.PROFESSIONAL.value,
    "empresa": TenantType.COMPANY.value,
}


class UserStatus(str, Enum):
    """User status enumeration"""
    PENDING_VERIFICATION = "pending_verification"   # Email not verified
    ACTIVE = "active"
    SUSPENDED = "suspended"                         # Administrative block
    DELETED = "deleted"                             # Soft delete


class User(AggregateRoot):
    """
    User aggregate root.

    Lifecycle: created ``pending_verification`` -> ``active`` on successful
    verification -> ``suspended`` / ``deleted`` administratively. Users are
    never physically deleted.

    Lockout: ``record_failed_login`` increments ``failed_login_attempts`` and,
    once the counter reaches the threshold, sets ``locked_until``. A
    successful login or ``activate()`` clears both.
    """

    email: Email
    hashed_password: Password
    phone: Phone
    name: str = Field(min_length=1)
    country: str
    city: str
    tenant_type: TenantType
    status: UserStatus = UserStatus.PENDING_VERIFICATION
    last_login_at: Optional[datetime] = None
    failed_login_attempts: int = Field(default=0, ge=0)
    locked_until: Optional[datetime] = None

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def create(
        cls,
        tenant_type: TenantType,
        email: Email,
        hashed_password: Password,
        phone: Phone,
        name: str,
        country: str,
        city: str,
    ) -> "User":
        """Create a new user awaiting email verification."""
        return cls(
            email=email,
            hashed_password=hashed_password,
            phone=phone,
            name=name,
            country=country,
            city=city,
            tenant_type=tenant_type,
        )

    @classmethod
    def create_professional(cls, email: Email, hashed_password: Password, phone: Phone,
                            name: str, country: str, city: str) -> "User":
        return cls.create(TenantType.PROFESSIONAL, email, hashed_password, phone, name, country, city)

    @classmethod
    def create_company(cls, email: Email, hashed_password: Password, phone: Phone,
                       name: str, country: str, city: str) -> "User":
        return cls.create(TenantType.COMPANY, email, hashed_password, phone, name, country, city)

    # =========================================================================
    # STATUS TRANSITIONS
    # =========================================================================

    def verify(self) -> None:
        """Activate a pending user. No-op in any other status."""
        if self.status != UserStatus.PENDING_VERIFICATION:
            return
        self.status = UserStatus.ACTIVE
        self.touch()

    def suspend(self) -> None:
        self.status = UserStatus.SUSPENDED
        self.touch()

    def activate(self) -> None:
        """Set the user active and clear any lockout."""
        self.status = UserStatus.ACTIVE
        self.failed_login_attempts = 0
        self.locked_until = None
        self.touch()

    def mark_as_deleted(self) -> None:
        self.status = UserStatus.DELETED
        self.touch()

    # =========================================================================
    # LOGIN TRACKING
    # =========================================================================

    def record_successful_login(self) -> None:
        self.last_login_at = utc_now()
        self.failed_login_attempts = 0
        self.locked_until = None
        self.touch()

    def record_failed_login(
        self,
        max_attempts: int = DEFAULT_MAX_FAILED_ATTEMPTS,
        lock_duration: timedelta = DEFAULT_LOCK_DURATION,
    ) -> None:
        """
        Count a failed login and lock the account once the threshold is hit.

        Args:
            max_attempts: Failures that trigger the lock
            lock_duration: How long the lock lasts from now
        """
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= max_attempts:
            self.locked_until = utc_now() + lock_duration
        self.touch()

    # =========================================================================
    # PROFILE
    # =========================================================================

    def update_password(self, hashed_password: Password) -> None:
        self.hashed_password = hashed_password
        self.touch()

    def update_profile(
        self,
        name: Optional[str] = None,
        phone: Optional[Phone] = None,
        country: Optional[str] = None,
        city: Optional[str] = None,
    ) -> None:
        """Update the mutable profile fields that were provided."""
        if name is not None:
            self.name = name
        if phone is not None:
            self.phone = phone
        if country is not None:
            self.country = country
        if city is not None:
            self.city = city
        self.touch()

    # =========================================================================
    # QUERIES
    # =========================================================================

    def is_locked(self) -> bool:
        return self.locked_until is not None and utc_now() < self.locked_until

    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE and not self.is_locked()

    def is_pending_verification(self) -> bool:
        return self.status == UserStatus.PENDING_VERIFICATION

    def is_deleted(self) -> bool:
        return self.status == UserStatus.DELETED
