"""
Builders shared by the test modules.
"""

import re
from typing import Any, Dict

from app.modules.authentication.application.commands import (
    DeviceMetaData,
    LoginUserCommand,
    RegisterUserCommand,
)
from app.shared.config.settings import Settings

TEST_PASSWORD = "Sup3r-Secret!pw"
CODE_PATTERN = re.compile(r"\b(\d{5})\b")


def make_settings(**overrides: Any) -> Settings:
    """Settings for tests: in-memory storage, logging email, cheap hashing."""
    values: Dict[str, Any] = {
        "ENVIRONMENT": "test",
        "DEBUG": False,
        "LOG_LEVEL": "WARNING",
        "STORAGE_BACKEND": "memory",
        "EMAIL_BACKEND": "logging",
        "JWT_SECRET_KEY": "test-secret-key-with-enough-entropy-0123456789",
        "ARGON2_MEMORY_COST": 1024,
        "ARGON2_TIME_COST": 1,
        "ARGON2_PARALLELISM": 1,
    }
    values.update(overrides)
    return Settings(**values)


def registration(email: str = "ana@example.com", **overrides: Any) -> RegisterUserCommand:
    values: Dict[str, Any] = {
        "email": email,
        "phone": "+34 600 123 456",
        "name": "Ana Torres",
        "country": "Spain",
        "city": "Madrid",
        "password": TEST_PASSWORD,
        "tenant_type": "professional",
    }
    values.update(overrides)
    return RegisterUserCommand(**values)


def login_command(email: str = "ana@example.com", device_id: str = "device-1", **overrides: Any) -> LoginUserCommand:
    values: Dict[str, Any] = {
        "email": email,
        "password": TEST_PASSWORD,
        "device_id": device_id,
        "device_meta": DeviceMetaData(
            user_agent="pytest",
            ip_address="203.0.113.7",
            browser="Firefox",
            os="Linux",
        ),
    }
    values.update(overrides)
    return LoginUserCommand(**values)


def extract_code(text: str) -> str:
    """Pull the 5-digit code out of a verification email body."""
    match = CODE_PATTERN.search(text)
    assert match, f"No verification code in message: {text!r}"
    return match.group(1)
