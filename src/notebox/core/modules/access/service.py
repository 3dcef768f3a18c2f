from uuid import UUID

from notebox.core.core import Service
from notebox.core.modules.note.models import Note
from notebox.core.modules.session.models import AuthContext, SessionId
from notebox.errors import AuthenticationError, NotFoundError
from notebox.utils import parse_uuid


class AccessService(Service):
    async def ensure_authenticated(self, session_id: SessionId | None) -> AuthContext:
        """Resolve a session id to its authenticated context, raise AuthenticationError if there is none."""
        if not session_id:
            raise AuthenticationError
        context = await self.core.services.session.validate_session(session_id)
        if context is None:
            raise AuthenticationError
        return context

    async def ensure_note_owner(self, note_id: UUID | str, user_id: UUID) -> Note:
        """Return the note if the user owns it.

        A note owned by someone else raises exactly what a missing note raises.
        """
        if isinstance(note_id, str):
            parsed = parse_uuid(note_id)
            if parsed is None:
                raise NotFoundError("Note not found")
            note_id = parsed
        note = await self.core.services.note.find_owned_note(note_id, user_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note
