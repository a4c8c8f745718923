# 📄 File: app/modules/authentication/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the contracts for password hashing, token issuing and sending emails.
# 🧪 Purpose (Technical Summary):
# Package initialization for domain service interfaces.
# 🔗 Dependencies:
# Service interface classes
# 🔄 Connected Modules / Calls From:
# Use cases, container, infrastructure implementations

from .email_service import EmailService
from .password_service import PasswordService
from .token_service import TokenPayload, TokenService

__all__ = ["EmailService", "PasswordService", "TokenPayload", "TokenService"]
