from datetime import timedelta
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from notebox.core.core import Service
from notebox.core.modules.session.models import AuthContext, Session, SessionId
from notebox.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues, validates and removes login sessions.

    Validity is checked against the database on every call, nothing is cached.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("user_id", 1)])
        # Range scans by the expired-session sweep
        await self._collection.create_index([("expires_at", 1)])

    @property
    def max_age(self) -> timedelta:
        return self.core.config.session_max_age

    async def create_session(self, user_id: UUID) -> SessionId:
        session = Session(user_id=user_id, expires_at=now() + self.max_age)
        await self._collection.insert_one(session.to_mongo())
        logger.debug("session_created", user_id=user_id, expires_at=session.expires_at)
        return SessionId(session.id)

    async def get_session(self, session_id: SessionId) -> Session | None:
        """Raw lookup without expiry checks."""
        return Session.from_mongo(await self._collection.find_one({"_id": session_id}))

    async def validate_session(self, session_id: SessionId) -> AuthContext | None:
        """Return the session and its user, or None if the session is unknown, expired or orphaned.

        Expired and orphaned sessions are evicted on the spot.
        """
        session = await self.get_session(session_id)
        if session is None:
            return None

        if session.is_expired(now()):
            logger.debug("session_expired", user_id=session.user_id)
            await self._evict(session_id)
            return None

        user = await self.core.services.user.find_user(session.user_id)
        if user is None:
            logger.warning("session_user_missing", user_id=session.user_id)
            await self._evict(session_id)
            return None

        return AuthContext(user=user, session=session)

    async def delete_session(self, session_id: SessionId) -> None:
        """Remove a session. Deleting an unknown session is a no-op."""
        await self._collection.delete_one({"_id": session_id})

    async def cleanup_expired_sessions(self) -> int:
        """Delete all sessions whose expiry is at or before now and return the count."""
        result = await self._collection.delete_many({"expires_at": {"$lte": now()}})
        if result.deleted_count:
            logger.info("expired_sessions_swept", count=result.deleted_count)
        return result.deleted_count

    async def _evict(self, session_id: SessionId) -> None:
        # Best effort: the request already gets "no session" whether or not this succeeds
        try:
            await self.delete_session(session_id)
        except PyMongoError:
            logger.warning("session_eviction_failed", exc_info=True)
