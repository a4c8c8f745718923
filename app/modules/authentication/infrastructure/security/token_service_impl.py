# 📄 File: app/modules/authentication/infrastructure/security/token_service_impl.py
# 🧭 Purpose (Layman Explanation):
# Creates the short-lived "access pass" (a signed JWT) handed out at login and checks
# it on every protected request. Also creates the long random refresh tokens.
#
# 🧪 Purpose (Technical Summary):
# python-jose JWT implementation of TokenService. Access tokens carry userId,
# sessionId, sub, jti, iat, exp, iss and aud; verification enforces signature,
# issuer, audience and expiry. Refresh tokens are opaque 64-char alphanumeric strings
# drawn from the secrets module.
#
# 🔗 Dependencies:
# - python-jose (jwt, JWTError, ExpiredSignatureError)
# - app.modules.authentication.domain.services.token_service (interface, TokenPayload)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.authentication.container
# - LoginUser and RefreshToken use cases, presentation.dependencies (bearer auth)

import logging
import re
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from app.modules.authentication.domain.models import new_id, utc_now
from app.modules.authentication.domain.services import TokenPayload, TokenService
from app.shared.core.exceptions import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

REFRESH_TOKEN_LENGTH = 64
REFRESH_TOKEN_ALPHABET = string.ascii_letters + string.digits
REFRESH_TOKEN_PATTERN = re.compile(rf"^[A-Za-z0-9]{{{REFRESH_TOKEN_LENGTH}}}$")


class JWTTokenService(TokenService):
    """
    JWT access tokens and opaque refresh tokens.
    """

    def __init__(
        self,
        signing_key: str,
        verification_key: str,
        algorithm: str = "HS256",
        issuer: str = "SIGma-System",
        audience: str = "SIGma-Users",
        access_token_ttl: timedelta = timedelta(minutes=15),
    ):
        """
        Initialize the token service.

        Args:
            signing_key: HMAC secret or RSA private key (PEM)
            verification_key: HMAC secret or RSA public key (PEM)
            algorithm: JWT algorithm, e.g. HS256 or RS256
            issuer: Value of the iss claim
            audience: Value of the aud claim
            access_token_ttl: Access token lifetime
        """
        self._signing_key = signing_key
        self._verification_key = verification_key
        self._algorithm = algorithm
        self._issuer = issuer
        self._audience = audience
        self._access_token_ttl = access_token_ttl

    @property
    def access_token_ttl_seconds(self) -> int:
        return int(self._access_token_ttl.total_seconds())

    def generate_access_token(self, user_id: str, session_id: str) -> str:
        now = utc_now()
        claims = {
            "sub": user_id,
            "userId": user_id,
            "sessionId": session_id,
            "jti": new_id(),
            "iat": int(now.timestamp()),
            "exp": int((now + self._access_token_ttl).timestamp()),
            "iss": self._issuer,
            "aud": self._audience,
        }
        return jwt.encode(claims, self._signing_key, algorithm=self._algorithm)

    def generate_refresh_token(self) -> str:
        return "".join(secrets.choice(REFRESH_TOKEN_ALPHABET) for _ in range(REFRESH_TOKEN_LENGTH))

    def verify_access_token(self, token: str) -> TokenPayload:
        if not token:
            raise InvalidTokenError("Token is required")

        try:
            claims = jwt.decode(
                token,
                self._verification_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except JWTError as e:
            logger.debug(f"Access token rejected: {str(e)}")
            raise InvalidTokenError() from e

        try:
            return TokenPayload(
                user_id=claims["userId"],
                session_id=claims["sessionId"],
                issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
                issuer=claims["iss"],
                audience=claims["aud"],
                token_id=claims.get("jti"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError("Token is missing required claims") from e

    def verify_refresh_token(self, token: str) -> bool:
        return bool(token) and REFRESH_TOKEN_PATTERN.match(token) is not None

    def decode_token(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            return jwt.get_unverified_claims(token)
        except JWTError:
            return None

    def get_token_expiration_time(self, token: str) -> int:
        claims = self.decode_token(token)
        if not claims or "exp" not in claims:
            return 0
        remaining = int(claims["exp"]) - int(utc_now().timestamp())
        return max(remaining, 0)
