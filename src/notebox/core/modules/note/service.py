from typing import Any
from uuid import UUID

import structlog
from pymongo import DESCENDING, ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from notebox.core.core import Service
from notebox.core.modules.note.models import Note
from notebox.core.modules.note.validators import validate_title
from notebox.core.pagination import PaginationResult
from notebox.errors import NotFoundError
from notebox.utils import now

logger = structlog.get_logger(__name__)


class NoteService(Service):
    """Manages notes. Every single-note operation is scoped by note id and owner id together."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("notes")

    async def on_start(self) -> None:
        """Create index for per-owner listing sorted by last update."""
        await self._collection.create_index([("user_id", 1), ("updated_at", -1)])

    async def create_note(self, user_id: UUID, title: str, content: str) -> Note:
        timestamp = now()
        note = Note(
            title=validate_title(title), content=content, user_id=user_id, created_at=timestamp, updated_at=timestamp
        )
        await self._collection.insert_one(note.to_mongo())
        logger.debug("note_created", note_id=note.id, user_id=user_id)
        return note

    async def list_notes(self, user_id: UUID, limit: int = 50, offset: int = 0) -> PaginationResult[Note]:
        """Get a page of the user's notes, most recently updated first."""
        query = {"user_id": user_id}
        total = await self._collection.count_documents(query)
        cursor = self._collection.find(query).sort("updated_at", DESCENDING).skip(offset).limit(limit)
        items = await Note.list_cursor(cursor)
        return PaginationResult(items=items, total=total, limit=limit, offset=offset)

    async def find_owned_note(self, note_id: UUID, user_id: UUID) -> Note | None:
        """Single lookup keyed by both id and owner."""
        return Note.from_mongo(await self._collection.find_one({"_id": note_id, "user_id": user_id}))

    async def update_note(
        self, note_id: UUID, user_id: UUID, title: str | None = None, content: str | None = None
    ) -> Note:
        """Update title and/or content of an owned note (partial update)."""
        update_doc: dict[str, Any] = {"updated_at": now()}
        if title is not None:
            update_doc["title"] = validate_title(title)
        if content is not None:
            update_doc["content"] = content

        doc = await self._collection.find_one_and_update(
            {"_id": note_id, "user_id": user_id},
            {"$set": update_doc},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            # Deleted between the ownership check and the write
            raise NotFoundError("Note not found")
        logger.debug("note_updated", note_id=note_id, fields=sorted(update_doc))
        return Note.model_validate(doc)

    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        result = await self._collection.delete_one({"_id": note_id, "user_id": user_id})
        if result.deleted_count == 0:
            raise NotFoundError("Note not found")
        logger.debug("note_deleted", note_id=note_id)
