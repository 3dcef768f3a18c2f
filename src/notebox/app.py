from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from pydantic import BaseModel
from pymongo.asynchronous.database import AsyncDatabase

from notebox.config import Config
from notebox.core.core import Core
from notebox.core.modules.note.models import Note
from notebox.core.modules.session.cookies import CookieAttributes, decide_cookie_attributes
from notebox.core.modules.session.models import AuthContext, SessionId
from notebox.core.modules.user.models import UserView
from notebox.core.pagination import PaginationResult


class AuthResult(BaseModel):
    """Outcome of register/login: the public user plus the session id to put in the cookie."""

    user: UserView
    session_id: SessionId


class App:
    """Facade for all application operations, authorizes before delegating to Core."""

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, database)
        # Decided once so a bad origin fails at startup, not after a register has written data
        self._cookie_attributes = decide_cookie_attributes(
            config.is_production, config.frontend_url, config.service_url, config.session_max_age
        )

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Authentication ===
    async def register(self, email: str, password: str, name: str | None = None) -> AuthResult:
        """Create an account and log it in."""
        user = await self._core.services.auth.register(email, password, name)
        session_id = await self.create_session(user.id)
        return AuthResult(user=UserView.from_domain(user), session_id=session_id)

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate user and create session."""
        user = await self._core.services.auth.login(email, password)
        session_id = await self.create_session(user.id)
        return AuthResult(user=UserView.from_domain(user), session_id=session_id)

    async def logout(self, session_id: SessionId | None) -> None:
        """End the session if there is one. Always succeeds."""
        if session_id:
            await self.delete_session(session_id)

    async def validate_session(self, session_id: SessionId | None) -> AuthContext:
        """Resolve the request's session cookie, raise AuthenticationError if it is missing or dead."""
        return await self._core.services.access.ensure_authenticated(session_id)

    async def get_current_user(self, ctx: AuthContext) -> UserView:
        return UserView.from_domain(ctx.user)

    # === Sessions ===
    async def create_session(self, user_id: UUID) -> SessionId:
        return await self._core.services.session.create_session(user_id)

    async def delete_session(self, session_id: SessionId) -> None:
        await self._core.services.session.delete_session(session_id)

    async def cleanup_expired_sessions(self) -> int:
        """Run one sweep pass outside the background schedule."""
        return await self._core.session_sweeper.run_once()

    def session_cookie_attributes(self) -> CookieAttributes:
        return self._cookie_attributes

    # === Notes ===
    async def authorize_note(self, note_id: UUID | str, user_id: UUID) -> Note:
        """Return the note if owned by the user, raise NotFoundError otherwise."""
        return await self._core.services.access.ensure_note_owner(note_id, user_id)

    async def get_notes(self, ctx: AuthContext, limit: int = 50, offset: int = 0) -> PaginationResult[Note]:
        return await self._core.services.note.list_notes(ctx.user.id, limit, offset)

    async def create_note(self, ctx: AuthContext, title: str, content: str) -> Note:
        return await self._core.services.note.create_note(ctx.user.id, title, content)

    async def get_note(self, ctx: AuthContext, note_id: UUID | str) -> Note:
        return await self.authorize_note(note_id, ctx.user.id)

    async def update_note(
        self, ctx: AuthContext, note_id: UUID | str, title: str | None = None, content: str | None = None
    ) -> Note:
        """Update an owned note (partial update)."""
        note = await self.authorize_note(note_id, ctx.user.id)
        return await self._core.services.note.update_note(note.id, ctx.user.id, title, content)

    async def delete_note(self, ctx: AuthContext, note_id: UUID | str) -> None:
        note = await self.authorize_note(note_id, ctx.user.id)
        await self._core.services.note.delete_note(note.id, ctx.user.id)
