from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from notebox.core.core import Service
from notebox.core.modules.user.models import User
from notebox.errors import AlreadyExistsError, NotFoundError
from notebox.utils import now

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Stores user records. Lookups always go to the database."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("email", 1)], unique=True)
        logger.debug("user_service_started")

    async def find_user(self, user_id: UUID) -> User | None:
        return User.from_mongo(await self._collection.find_one({"_id": user_id}))

    async def get_user(self, user_id: UUID) -> User:
        """Get user by ID."""
        user = await self.find_user(user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user

    async def find_user_by_email(self, email: str) -> User | None:
        """Find user by exact email match."""
        return User.from_mongo(await self._collection.find_one({"email": email}))

    async def has_email(self, email: str) -> bool:
        return await self._collection.count_documents({"email": email}, limit=1) > 0

    async def create_user(self, email: str, password_hash: str, name: str | None = None) -> User:
        """Persist a new user with an already hashed password."""
        timestamp = now()
        user = User(email=email, password_hash=password_hash, name=name, created_at=timestamp, updated_at=timestamp)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            # Lost a race with a concurrent registration of the same email
            raise AlreadyExistsError from e
        return user
