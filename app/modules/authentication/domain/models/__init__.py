# 📄 File: app/modules/authentication/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the core data models: users, device sessions, verification codes and the
# small validated values (email, password, phone) they are built from.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting entities, enums and value objects.
# 🔗 Dependencies:
# Domain model classes, enums, pydantic base models
# 🔄 Connected Modules / Calls From:
# Repositories, use cases, infrastructure layer, tests

from .base import AggregateRoot, new_id, utc_now
from .session import DeviceMeta, Session, SessionStatus
from .user import TenantType, User, UserStatus
from .value_objects import (
    DEFAULT_PASSWORD_POLICY,
    Email,
    Password,
    PasswordPolicy,
    Phone,
)
from .verification_code import MAX_ATTEMPTS, VerificationCode

__all__ = [
    "AggregateRoot",
    "new_id",
    "utc_now",
    "DeviceMeta",
    "Session",
    "SessionStatus",
    "TenantType",
    "User",
    "UserStatus",
    "DEFAULT_PASSWORD_POLICY",
    "Email",
    "Password",
    "PasswordPolicy",
    "Phone",
    "MAX_ATTEMPTS",
    "VerificationCode",
]
