# 📄 File: app/modules/authentication/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Small helpers the web endpoints ask for: the assembled authentication service, the
# caller's IP address, and "who is calling" read from the Bearer access token.
#
# 🧪 Purpose (Technical Summary):
# FastAPI dependency providers. The AuthContainer lives on app.state (set by the
# lifespan in app/main.py). Bearer tokens are verified through the container's
# TokenService; a missing header raises TokenNotFoundError (401 TOKEN_NOT_FOUND).
#
# 🔗 Dependencies:
# - FastAPI (Request, Depends, HTTPBearer)
# - app.modules.authentication.container (AuthContainer)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.authentication.presentation.api.v1.auth

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.modules.authentication.container import AuthContainer
from app.modules.authentication.domain.services import TokenPayload
from app.shared.core.exceptions import TokenNotFoundError
from app.shared.utils.logging import bind_user

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> AuthContainer:
    """Authentication container built at application startup."""
    return request.app.state.container


def get_client_ip(request: Request) -> str:
    """
    Client IP address, honoring proxy headers.

    Checks X-Forwarded-For (first hop), then X-Real-IP, then the socket peer.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host
    return "unknown"


async def get_optional_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    container: AuthContainer = Depends(get_container),
) -> Optional[TokenPayload]:
    """Verified claims if a Bearer token was sent, None otherwise."""
    if credentials is None or not credentials.credentials:
        return None
    payload = container.token_service.verify_access_token(credentials.credentials)
    bind_user(payload.user_id)
    return payload


async def get_token_payload(
    payload: Optional[TokenPayload] = Depends(get_optional_token_payload),
) -> TokenPayload:
    """Verified claims of the required Bearer access token."""
    if payload is None:
        raise TokenNotFoundError()
    return payload
