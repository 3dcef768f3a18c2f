import asyncio

import structlog

from notebox.core.core import Service
from notebox.core.modules.user.models import User
from notebox.core.modules.user.password import dummy_password_hash, hash_password, verify_password
from notebox.errors import AlreadyExistsError, InvalidCredentialsError

logger = structlog.get_logger(__name__)


class AuthService(Service):
    """Registration and credential checks. Issuing sessions is left to the caller."""

    async def register(self, email: str, password: str, name: str | None = None) -> User:
        """Create a user account.

        The email is checked before hashing so a taken address never pays for an argon2 run.

        Raises:
            AlreadyExistsError: If a user with exactly this email exists
            ValidationError: If the password is empty
        """
        users = self.core.services.user
        if await users.has_email(email):
            raise AlreadyExistsError

        # argon2 is CPU-bound, keep it off the event loop
        password_hash = await asyncio.to_thread(hash_password, password)
        user = await users.create_user(email, password_hash, name)
        logger.info("user_registered", user_id=user.id)
        return user

    async def login(self, email: str, password: str) -> User:
        """Verify credentials and return the matching user.

        Unknown email and wrong password raise the same error with the same message.
        """
        user = await self.core.services.user.find_user_by_email(email)
        if user is None:
            await asyncio.to_thread(verify_password, password, dummy_password_hash())
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentialsError

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.info("login_failed", reason="wrong_password", user_id=user.id)
            raise InvalidCredentialsError

        logger.info("login_succeeded", user_id=user.id)
        return user
