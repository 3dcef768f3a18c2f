from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from notebox.core.db import MongoModel
from notebox.utils import now


class User(MongoModel):
    """User domain model with credentials.

    Indexed on email - unique. Email matching is exact, no case folding.
    """

    email: str
    password_hash: str  # argon2id encoded hash, never leaves the core
    name: str | None = None
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    name: str | None = Field(None, description="Display name")
    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: datetime = Field(..., description="Last profile update timestamp")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
