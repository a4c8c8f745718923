"""
Core package for the SIGma authentication service.
Provides the domain error hierarchy shared by every layer.
"""

from .exceptions import (
    AccountLockedError,
    AccountSuspendedError,
    ConcurrentModificationError,
    DomainError,
    EmailDeliveryError,
    InvalidCredentialsError,
    InvalidTokenError,
    MaxSessionsExceededError,
    RepositoryError,
    SessionExpiredError,
    SessionNotFoundError,
    TokenExpiredError,
    TokenNotFoundError,
    UseCaseFailedError,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserNotVerifiedError,
    exception_to_dict,
    is_client_error,
)

__all__ = [
    # Base
    "DomainError",

    # Authentication
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenNotFoundError",
    "SessionExpiredError",
    "UserNotVerifiedError",
    "AccountSuspendedError",
    "AccountLockedError",

    # Lookup and conflicts
    "UserNotFoundError",
    "SessionNotFoundError",
    "UserAlreadyExistsError",
    "ConcurrentModificationError",
    "MaxSessionsExceededError",

    # Infrastructure
    "UseCaseFailedError",
    "RepositoryError",
    "EmailDeliveryError",

    # Helpers
    "exception_to_dict",
    "is_client_error",
]
