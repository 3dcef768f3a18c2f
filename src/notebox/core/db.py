from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor

Document = dict[str, Any]


class MongoModel(BaseModel):
    """Base for stored entities. Stored as `_id`, exposed over the API as `id`."""

    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> Document:
        doc = self.model_dump(exclude={"id"})
        return {"_id": self.id, **doc}

    @classmethod
    def from_mongo(cls, doc: Document | None) -> Self | None:
        """Build a model from a raw document, None when nothing was found."""
        return None if doc is None else cls.model_validate(doc)

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[Document]) -> list[Self]:
        return [cls.model_validate(doc) async for doc in cursor]
