# 📄 File: app/modules/authentication/infrastructure/security/password_service_impl.py
# 🧭 Purpose (Layman Explanation):
# Turns passwords into one-way scrambled hashes before they are stored, and checks a
# typed password against the stored hash at login.
#
# 🧪 Purpose (Technical Summary):
# Argon2id hashing through passlib's CryptContext with cost parameters from settings.
# Hashing and verification are CPU-bound and run in a worker thread so the event loop
# stays responsive.
#
# 🔗 Dependencies:
# - passlib (CryptContext), argon2-cffi (argon2 backend)
# - app.modules.authentication.domain.services.password_service (interface)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.authentication.container
# - RegisterUser and LoginUser use cases

import asyncio
import logging
import secrets
import string

from passlib.context import CryptContext

from app.modules.authentication.domain.models import Password
from app.modules.authentication.domain.models.value_objects import SPECIAL_CHARACTERS
from app.modules.authentication.domain.services import PasswordService

logger = logging.getLogger(__name__)

TEMPORARY_PASSWORD_LENGTH = 16


class Argon2PasswordService(PasswordService):
    """
    Password hashing with Argon2 via passlib.

    Hashes produced with older cost parameters still verify; ``needs_rehash``
    reports them so the login flow can upgrade them.
    """

    def __init__(self, memory_cost: int = 65536, time_cost: int = 3, parallelism: int = 1):
        """
        Initialize the hashing context.

        Args:
            memory_cost: Memory usage in KiB
            time_cost: Number of iterations
            parallelism: Number of lanes
        """
        self._context = CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__memory_cost=memory_cost,
            argon2__time_cost=time_cost,
            argon2__parallelism=parallelism,
        )

    async def hash(self, password: Password) -> Password:
        if password.is_hashed:
            return password
        hashed = await asyncio.to_thread(self._context.hash, password.value)
        return Password.create_from_hash(hashed)

    async def verify(self, plain_password: str, hashed_password: Password) -> bool:
        if not plain_password or not hashed_password.value:
            return False
        try:
            return await asyncio.to_thread(self._context.verify, plain_password, hashed_password.value)
        except (ValueError, TypeError) as e:
            # Unrecognized or corrupted hash
            logger.warning(f"Password verification failed on malformed hash: {type(e).__name__}")
            return False

    def generate_temporary_password(self) -> Password:
        groups = [string.ascii_uppercase, string.ascii_lowercase, string.digits, SPECIAL_CHARACTERS]
        alphabet = "".join(groups)

        chars = [secrets.choice(group) for group in groups]
        chars += [secrets.choice(alphabet) for _ in range(TEMPORARY_PASSWORD_LENGTH - len(groups))]
        secrets.SystemRandom().shuffle(chars)
        return Password.create("".join(chars))

    def needs_rehash(self, hashed_password: Password) -> bool:
        try:
            return self._context.needs_update(hashed_password.value)
        except ValueError:
            return True
