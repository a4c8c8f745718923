# 📄 File: app/modules/authentication/presentation/api/v1/auth.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for signing up, confirming the emailed code, logging in from a
# device, getting a fresh access pass, logging out, and listing logged-in devices.
#
# 🧪 Purpose (Technical Summary):
# Thin FastAPI router over the authentication use cases. Each endpoint converts the
# request schema to a command, executes the use case from the AuthContainer and maps
# the result DTO to a response schema. Domain errors propagate to the application
# exception handlers, which render {status, code, message, details}.
#
# 🔗 Dependencies:
# - FastAPI router and dependencies
# - app.modules.authentication.presentation.api.schemas.auth_schemas
# - app.modules.authentication.presentation.dependencies
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted under /api/v1/auth)

"""
Authentication API Endpoints

Endpoints:
- POST /register: Create a pending account and email a verification code
- POST /verify: Activate the account with the emailed code
- POST /login: Email/password login bound to a device
- POST /refresh: New access token from a refresh token
- POST /logout: Revoke one device session
- POST /logout-all: Revoke every session of the caller (Bearer)
- GET /me/sessions: Active sessions of the caller (Bearer)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from app.modules.authentication.application.commands import (
    ListSessionsCommand,
    LogoutAllCommand,
)
from app.modules.authentication.container import AuthContainer
from app.modules.authentication.domain.services import TokenPayload
from app.modules.authentication.presentation.api.schemas.auth_schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LogoutAllResponse,
    LogoutRequest,
    LogoutResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
    SessionListResponse,
    VerifyRequest,
    VerifyResponse,
)
from app.modules.authentication.presentation.dependencies import (
    get_client_ip,
    get_container,
    get_optional_token_payload,
    get_token_payload,
)

logger = logging.getLogger(__name__)

auth_router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
}


@auth_router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Register new user account",
    responses={
        **ERROR_RESPONSES,
        409: {"model": ErrorResponse, "description": "User already exists"},
    },
)
async def register(
    registration_data: RegisterRequest,
    container: AuthContainer = Depends(get_container),
) -> RegisterResponse:
    """
    Register a new account in pending_verification state.

    A 5-digit verification code is emailed to the address; the account
    cannot log in until it is verified.
    """
    result = await container.register_user.execute(registration_data.to_command())
    return RegisterResponse.from_result(result)


@auth_router.post(
    "/verify",
    response_model=VerifyResponse,
    summary="Verify account with emailed code",
    responses={
        **ERROR_RESPONSES,
        404: {"model": ErrorResponse, "description": "Code or user not found"},
        410: {"model": ErrorResponse, "description": "Code expired"},
    },
)
async def verify(
    verification_data: VerifyRequest,
    container: AuthContainer = Depends(get_container),
) -> VerifyResponse:
    result = await container.verify_user.execute(verification_data.to_command())
    return VerifyResponse.from_result(result)


@auth_router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in from a device",
    responses={
        **ERROR_RESPONSES,
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "Not verified or suspended"},
        404: {"model": ErrorResponse, "description": "User not found"},
        423: {"model": ErrorResponse, "description": "Account locked"},
        429: {"model": ErrorResponse, "description": "Too many active sessions"},
    },
)
async def login(
    request: Request,
    login_data: LoginRequest,
    container: AuthContainer = Depends(get_container),
) -> LoginResponse:
    """
    Authenticate and bind the login to ``deviceId``.

    Logging in again from the same device rotates that device's refresh
    token instead of opening another session.
    """
    command = login_data.to_command(
        client_ip=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
    result = await container.login_user.execute(command)
    logger.info(f"Login succeeded for session {result.session_id}")
    return LoginResponse.from_result(result)


@auth_router.post(
    "/refresh",
    response_model=RefreshResponse,
    summary="Issue a new access token",
    responses={
        **ERROR_RESPONSES,
        401: {"model": ErrorResponse, "description": "Missing token or session ended"},
        404: {"model": ErrorResponse, "description": "Unknown refresh token"},
    },
)
async def refresh(
    refresh_data: RefreshRequest,
    container: AuthContainer = Depends(get_container),
) -> RefreshResponse:
    result = await container.refresh_token.execute(refresh_data.to_command())
    return RefreshResponse.from_result(result)


@auth_router.post(
    "/logout",
    response_model=LogoutResponse,
    summary="Log out one device session",
    responses={
        **ERROR_RESPONSES,
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def logout(
    logout_data: LogoutRequest,
    container: AuthContainer = Depends(get_container),
    token: Optional[TokenPayload] = Depends(get_optional_token_payload),
) -> LogoutResponse:
    """
    Revoke the session identified by ``sessionId``, ``refreshToken`` or
    ``deviceId``. With a Bearer token the session must belong to its user.
    """
    command = logout_data.to_command(authenticated_user_id=token.user_id if token else None)
    result = await container.logout.execute(command)
    return LogoutResponse.from_result(result)


@auth_router.post(
    "/logout-all",
    response_model=LogoutAllResponse,
    summary="Log out from all devices",
    responses={
        **ERROR_RESPONSES,
        401: {"model": ErrorResponse, "description": "Missing or invalid access token"},
    },
)
async def logout_all(
    container: AuthContainer = Depends(get_container),
    token: TokenPayload = Depends(get_token_payload),
) -> LogoutAllResponse:
    result = await container.logout_all.execute(LogoutAllCommand(user_id=token.user_id))
    return LogoutAllResponse.from_result(result)


@auth_router.get(
    "/me/sessions",
    response_model=SessionListResponse,
    summary="List active device sessions",
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid access token"}},
)
async def list_sessions(
    container: AuthContainer = Depends(get_container),
    token: TokenPayload = Depends(get_token_payload),
) -> SessionListResponse:
    result = await container.list_sessions.execute(
        ListSessionsCommand(user_id=token.user_id, current_session_id=token.session_id)
    )
    return SessionListResponse.from_result(result)
