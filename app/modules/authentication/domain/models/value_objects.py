# 📄 File: app/modules/authentication/domain/models/value_objects.py
# 🧭 Purpose (Layman Explanation):
# Small self-checking building blocks for user data: an email address, a password and a
# phone number. Each one refuses to exist if the data is malformed.
# 🧪 Purpose (Technical Summary):
# Immutable pydantic value objects with factory constructors that normalize and validate
# their input, raising typed domain errors. Equality is by normalized value.
# 🔗 Dependencies:
# pydantic, re, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# User entity, VerificationCode entity, RegisterUser/LoginUser use cases, repositories

import re
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict

from app.shared.core.exceptions import (
    InvalidEmailError,
    InvalidPasswordError,
    InvalidPhoneError,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
EMAIL_MAX_LENGTH = 320

PHONE_PATTERN = re.compile(r"^\+[1-9]\d{7,14}$")
PHONE_STRIP_PATTERN = re.compile(r"[^\d+]")

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

COMMON_PASSWORDS: FrozenSet[str] = frozenset({
    "123456789012",
    "password1234",
    "qwerty123456",
    "admin1234567",
    "letmein12345",
    "welcome12345",
    "monkey123456",
    "dragon123456",
})


class Email(BaseModel):
    """
    Email address value object.

    Always holds the trimmed, lowercased form. Build instances through
    ``Email.create`` so the value is validated.
    """

    model_config = ConfigDict(frozen=True)

    value: str

    @classmethod
    def create(cls, raw: str) -> "Email":
        """
        Normalize and validate an email address.

        Args:
            raw: Email as typed by the user

        Returns:
            Email: Normalized email

        Raises:
            InvalidEmailError: If the address is empty, too long or malformed
        """
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidEmailError(raw if isinstance(raw, str) else None)

        normalized = raw.strip().lower()
        if len(normalized) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError(raw)

        return cls(value=normalized)

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]

    def __str__(self) -> str:
        return self.value


class PasswordPolicy(BaseModel):
    """Rules a plain-text password must satisfy."""

    model_config = ConfigDict(frozen=True)

    min_length: int = 12
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_numbers: bool = True
    require_symbols: bool = True
    forbid_whitespace: bool = True
    forbid_common: bool = True

    def violation(self, password: str) -> Optional[str]:
        """
        Return the first rule the password breaks, or None if it complies.

        Rules are checked in a fixed order so the reported reason is stable.
        """
        if len(password) < self.min_length:
            return f"must be at least {self.min_length} characters long"
        if self.require_uppercase and not any(c.isupper() for c in password):
            return "must contain at least one uppercase letter"
        if self.require_lowercase and not any(c.islower() for c in password):
            return "must contain at least one lowercase letter"
        if self.require_numbers and not any(c.isdigit() for c in password):
            return "must contain at least one number"
        if self.require_symbols and not any(c in SPECIAL_CHARACTERS for c in password):
            return "must contain at least one special character"
        if self.forbid_whitespace and any(c.isspace() for c in password):
            return "must not contain whitespace"
        if self.forbid_common and password.lower() in COMMON_PASSWORDS:
            return "is too common"
        return None


DEFAULT_PASSWORD_POLICY = PasswordPolicy()


class Password(BaseModel):
    """
    Password value object.

    Holds either a plain-text password that passed the policy (``create``)
    or a stored hash wrapped without validation (``create_from_hash``).
    ``is_hashed`` records which constructor was used.
    """

    model_config = ConfigDict(frozen=True)

    value: str
    is_hashed: bool = False

    @classmethod
    def create(cls, raw: str, policy: Optional[PasswordPolicy] = None) -> "Password":
        """
        Validate a plain-text password against a policy.

        Args:
            raw: Plain-text password
            policy: Rules to apply, defaults to DEFAULT_PASSWORD_POLICY

        Raises:
            InvalidPasswordError: Naming the violated rule
        """
        if not isinstance(raw, str) or not raw:
            raise InvalidPasswordError("is required")

        reason = (policy or DEFAULT_PASSWORD_POLICY).violation(raw)
        if reason:
            raise InvalidPasswordError(reason)

        return cls(value=raw)

    @classmethod
    def create_from_hash(cls, hashed: str) -> "Password":
        """Wrap an already-hashed value loaded from storage."""
        return cls(value=hashed, is_hashed=True)

    def __str__(self) -> str:
        return "[PROTECTED]"

    def __repr__(self) -> str:
        return f"Password(is_hashed={self.is_hashed}, value=[PROTECTED])"


class Phone(BaseModel):
    """Phone number in E.164-like form (``+`` and 8 to 15 digits)."""

    model_config = ConfigDict(frozen=True)

    value: str

    @classmethod
    def create(cls, raw: str) -> "Phone":
        """
        Strip formatting characters and validate.

        Raises:
            InvalidPhoneError: If the cleaned number is not international format
        """
        if not isinstance(raw, str):
            raise InvalidPhoneError(None)

        normalized = PHONE_STRIP_PATTERN.sub("", raw)
        if not PHONE_PATTERN.match(normalized):
            raise InvalidPhoneError(raw)

        return cls(value=normalized)

    def formatted(self) -> str:
        """Human-readable grouping, e.g. ``+34 600 123 456``."""
        digits = self.value[1:]
        country_code, remaining = digits[:2], digits[2:]

        if len(remaining) <= 3:
            return f"+{country_code} {remaining}"
        if len(remaining) <= 6:
            return f"+{country_code} {remaining[:3]} {remaining[3:]}"
        return f"+{country_code} {remaining[:3]} {remaining[3:6]} {remaining[6:]}"

    def __str__(self) -> str:
        return self.value
