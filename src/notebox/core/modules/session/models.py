"""Session management models."""

import secrets
from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from notebox.core.db import MongoModel
from notebox.core.modules.user.models import User
from notebox.utils import now

SessionId = NewType("SessionId", str)


def generate_session_id() -> SessionId:
    """Return a new bearer identifier with 256 bits from the OS CSPRNG."""
    return SessionId(secrets.token_urlsafe(32))


class Session(MongoModel):
    """Server-side login session. The document id is the bearer token itself.

    Indexed on user_id and expires_at.
    """

    id: str = Field(alias="_id", serialization_alias="id", default_factory=generate_session_id)  # type: ignore[assignment]
    user_id: UUID
    expires_at: datetime
    created_at: datetime = Field(default_factory=now)

    def is_expired(self, at: datetime) -> bool:
        """A session is live only while its expiry is strictly in the future."""
        return self.expires_at <= at


class AuthContext(BaseModel):
    """Authenticated request context, produced once per request by session validation."""

    user: User
    session: Session

    model_config = ConfigDict(frozen=True)
