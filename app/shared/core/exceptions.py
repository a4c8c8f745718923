# 📄 File: app/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the authentication service uses to say
# exactly what went wrong (wrong password, locked account, expired code...) instead of
# generic error messages.
# 🧪 Purpose (Technical Summary):
# Domain error hierarchy. Every error carries an HTTP status, a stable machine-readable
# code, a human message and optional details, and serializes to the public error body.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# Value objects, entities, use cases, repositories, token service, API error handlers

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainError(Exception):
    """
    Base exception class for the authentication service.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the public error body."""
        body: Dict[str, Any] = {
            "status": self.status_code,
            "code": self.error_code,
            "message": self.message,
        }
        if self.details:
            body["details"] = self.details
        return body

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(status_code=self.status_code, detail=self.to_dict())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.error_code!r}, status={self.status_code})"


# =============================================================================
# VALIDATION EXCEPTIONS (400)
# =============================================================================

class InvalidEmailError(DomainError):
    """Raised when an email address fails format validation."""

    def __init__(self, email: Optional[str] = None):
        details = {"email": email} if email is not None else None
        super().__init__(
            message="Invalid email format",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="INVALID_EMAIL"
        )


class InvalidPasswordError(DomainError):
    """
    Raised when a password violates the password policy.
    The message names the rule that failed.
    """

    def __init__(self, reason: str):
        super().__init__(
            message=f"Invalid password: {reason}",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"reason": reason},
            error_code="INVALID_PASSWORD"
        )


class InvalidPhoneError(DomainError):
    """Raised when a phone number is not in international format."""

    def __init__(self, phone: Optional[str] = None):
        details = {"phone": phone} if phone is not None else None
        super().__init__(
            message="Invalid phone format. Must be in international format (+1234567890)",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="INVALID_PHONE"
        )


class InvalidTenantTypeError(DomainError):
    """Raised when the tenant type is neither professional nor company."""

    def __init__(self, tenant_type: Optional[str] = None):
        super().__init__(
            message="Invalid tenant type. Must be 'professional' or 'company'",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"tenantType": tenant_type},
            error_code="INVALID_TENANT_TYPE"
        )


class InvalidVerificationCodeError(DomainError):
    """Raised when a verification code is used up or out of attempts."""

    def __init__(self, message: str = "Invalid verification code"):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="INVALID_VERIFICATION_CODE"
        )


class InvalidEntityStateError(DomainError):
    """
    Raised when an entity method is called in a state that does not allow it.
    Used for invalid state transitions, e.g. using a spent verification code.
    """

    def __init__(self, message: str, entity: Optional[str] = None):
        details = {"entity": entity} if entity else None
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="INVALID_ENTITY_STATE"
        )


class RequestValidationFailed(DomainError):
    """Raised by the API layer when the request body does not match its schema."""

    def __init__(self, errors: Optional[list] = None):
        super().__init__(
            message="Request validation failed",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"errors": errors or []},
            error_code="VALIDATION_ERROR"
        )


# =============================================================================
# AUTHENTICATION EXCEPTIONS (401)
# =============================================================================

class InvalidCredentialsError(DomainError):
    """Raised when the email/password pair does not match."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="AUTH_INVALID_CREDENTIALS"
        )


class TokenExpiredError(DomainError):
    """Raised when an access token signature is valid but its expiry has passed."""

    def __init__(self):
        super().__init__(
            message="Token has expired",
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="TOKEN_EXPIRED"
        )


class InvalidTokenError(DomainError):
    """Raised when a token is malformed or fails signature/claim checks."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="INVALID_TOKEN"
        )


class TokenNotFoundError(DomainError):
    """Raised when a required token is missing or has the wrong shape."""

    def __init__(self):
        super().__init__(
            message="Token not provided",
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="TOKEN_NOT_FOUND"
        )


class SessionExpiredError(DomainError):
    """Raised when a session is expired or revoked."""

    def __init__(self):
        super().__init__(
            message="Session has expired",
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="SESSION_EXPIRED"
        )


# =============================================================================
# FORBIDDEN / LOCKED (403, 423)
# =============================================================================

class UserNotVerifiedError(DomainError):
    """Raised when a pending user tries to log in."""

    def __init__(self):
        super().__init__(
            message="User has not been verified",
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="USER_NOT_VERIFIED"
        )


class AccountSuspendedError(DomainError):
    """Raised when a suspended or deleted account tries to log in."""

    def __init__(self):
        super().__init__(
            message="Account suspended",
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="ACCOUNT_SUSPENDED"
        )


class AccountLockedError(DomainError):
    """
    Raised when the account is temporarily locked after repeated failed logins.
    Carries the unlock time so clients can tell the user when to retry.
    """

    def __init__(self, locked_until: Optional[datetime] = None):
        details = {"lockedUntil": locked_until.isoformat()} if locked_until else None
        super().__init__(
            message="Account temporarily locked due to multiple failed login attempts",
            status_code=status.HTTP_423_LOCKED,
            details=details,
            error_code="ACCOUNT_LOCKED"
        )


# =============================================================================
# NOT FOUND / GONE (404, 410)
# =============================================================================

class UserNotFoundError(DomainError):
    """Raised when no user matches the lookup."""

    def __init__(self, email: Optional[str] = None):
        details = {"email": email} if email else None
        super().__init__(
            message="User not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="USER_NOT_FOUND"
        )


class VerificationCodeNotFoundError(DomainError):
    def __init__(self):
        super().__init__(
            message="Verification code not found",
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="VERIFICATION_CODE_NOT_FOUND"
        )


class SessionNotFoundError(DomainError):
    def __init__(self):
        super().__init__(
            message="Session not found",
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="SESSION_NOT_FOUND"
        )


class VerificationCodeExpiredError(DomainError):
    def __init__(self):
        super().__init__(
            message="Verification code has expired",
            status_code=status.HTTP_410_GONE,
            error_code="VERIFICATION_CODE_EXPIRED"
        )


# =============================================================================
# CONFLICT / CAPACITY (409, 429)
# =============================================================================

class UserAlreadyExistsError(DomainError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: Optional[str] = None):
        details = {"email": email} if email else None
        super().__init__(
            message="User already exists",
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="USER_ALREADY_EXISTS"
        )


class ConcurrentModificationError(DomainError):
    """
    Raised when a write is based on a stale version of an entity.

    Repositories compare the version the entity was loaded with against the
    stored version and reject the update if another writer got there first.
    """

    def __init__(
        self,
        entity: str,
        entity_id: Optional[str] = None,
        expected_version: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        details["entity"] = entity
        if entity_id:
            details["entityId"] = entity_id
        if expected_version is not None:
            details["expectedVersion"] = expected_version

        super().__init__(
            message=f"{entity} was modified by another request",
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="CONCURRENT_MODIFICATION"
        )


class MaxSessionsExceededError(DomainError):
    """Raised when a new device would exceed the concurrent session cap."""

    def __init__(self, max_sessions: int):
        super().__init__(
            message=f"Maximum number of concurrent sessions reached ({max_sessions})",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            details={"maxSessions": max_sessions},
            error_code="MAX_SESSIONS_EXCEEDED"
        )


# =============================================================================
# INTERNAL EXCEPTIONS (500)
# =============================================================================

class UseCaseFailedError(DomainError):
    """
    Wraps an unexpected exception at a use case boundary.

    The original message is kept as a detail so the failure stays loggable
    without leaking a stack trace to the caller.
    """

    def __init__(self, error_code: str, message: str, original_error: Exception):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"originalError": str(original_error)},
            error_code=error_code
        )


class RepositoryError(DomainError):
    """
    Exception raised for repository/database operation failures.
    Used when database operations fail at the repository layer.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: Optional[str] = None,
        entity: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if entity:
            details["entity"] = entity

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="REPOSITORY_ERROR"
        )


class EmailDeliveryError(DomainError):
    """Raised by email backends when a message could not be handed off."""

    def __init__(self, message: str = "Email delivery failed", provider: Optional[str] = None):
        details = {"provider": provider} if provider else None
        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
            error_code="EMAIL_DELIVERY_FAILED"
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def exception_to_dict(exception: Exception) -> Dict[str, Any]:
    """
    Convert any exception to the public error body.

    Args:
        exception: Exception to convert

    Returns:
        Dict: Error body; unknown exceptions become a generic 500
    """
    if isinstance(exception, DomainError):
        return exception.to_dict()

    return {
        "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "code": "INTERNAL_ERROR",
        "message": "An internal error occurred",
    }


def is_client_error(exception: Exception) -> bool:
    """Check if exception is a client error (4xx)."""
    return isinstance(exception, DomainError) and 400 <= exception.status_code < 500
