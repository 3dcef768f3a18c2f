from datetime import datetime
from uuid import UUID

from pydantic import Field

from notebox.core.db import MongoModel
from notebox.utils import now


class Note(MongoModel):
    """Private text note, visible only to its owner.

    Indexed on (user_id, updated_at).
    """

    title: str
    content: str
    user_id: UUID  # Owner
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)
