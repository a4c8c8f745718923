"""
Shared pytest fixtures for the authentication service tests.
"""

import pytest

from app.modules.authentication.application.commands import VerifyUserCommand
from app.modules.authentication.container import AuthContainer, build_container
from app.modules.authentication.infrastructure.email import LoggingEmailService
from app.shared.config.settings import Settings
from tests.helpers import extract_code, make_settings, registration


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def email_service() -> LoggingEmailService:
    return LoggingEmailService()


@pytest.fixture
async def container(settings: Settings, email_service: LoggingEmailService) -> AuthContainer:
    """In-memory container with a recording email backend."""
    container = build_container(settings, email_service=email_service)
    await container.startup()
    yield container
    await container.shutdown()


@pytest.fixture
def register_and_verify(container: AuthContainer, email_service: LoggingEmailService):
    """Register a user and verify it with the emailed code. Returns the user id."""

    async def _register_and_verify(email: str = "ana@example.com") -> str:
        await container.register_user.execute(registration(email))
        message = email_service.last_message("verification_code", to=email)
        result = await container.verify_user.execute(VerifyUserCommand(code=extract_code(message.text)))
        return result.user_id

    return _register_and_verify
