"""In-memory stand-in for the subset of pymongo's async collection API the services use."""

import copy
from dataclasses import dataclass
from typing import Any

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

_OPERATORS = {
    "$lt": lambda value, bound: value < bound,
    "$lte": lambda value, bound: value <= bound,
    "$gt": lambda value, bound: value > bound,
    "$gte": lambda value, bound: value >= bound,
    "$ne": lambda value, bound: value != bound,
}


def matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, condition in query.items():
        if key not in doc:
            return False
        value = doc[key]
        if isinstance(condition, dict) and condition and all(op.startswith("$") for op in condition):
            if not all(_OPERATORS[op](value, bound) for op, bound in condition.items()):
                return False
        elif value != condition:
            return False
    return True


@dataclass
class InsertOneResult:
    inserted_id: Any


@dataclass
class DeleteResult:
    deleted_count: int


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs
        self._skip = 0
        self._limit = 0

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def skip(self, count: int) -> "FakeCursor":
        self._skip = count
        return self

    def limit(self, count: int) -> "FakeCursor":
        self._limit = count
        return self

    def _window(self) -> list[dict[str, Any]]:
        docs = self._docs[self._skip :]
        return docs[: self._limit] if self._limit else docs

    def __aiter__(self) -> Any:
        return self._iterate()

    async def _iterate(self) -> Any:
        for doc in self._window():
            yield doc

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return self._window()


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.unique_keys: list[tuple[str, ...]] = [("_id",)]
        self.indexes: list[list[tuple[str, int]]] = []
        self.fail_deletes = False

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **_: Any) -> str:
        self.indexes.append(keys)
        if unique:
            self.unique_keys.append(tuple(key for key, _ in keys))
        return "_".join(f"{key}_{direction}" for key, direction in keys)

    async def insert_one(self, doc: dict[str, Any]) -> InsertOneResult:
        for fields in self.unique_keys:
            key_values = {field: doc.get(field) for field in fields}
            if any(matches(existing, key_values) for existing in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} {key_values}", 11000)
        self.docs.append(copy.deepcopy(doc))
        return InsertOneResult(inserted_id=doc["_id"])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self.docs:
            if matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(doc) for doc in self.docs if matches(doc, query or {})])

    async def count_documents(self, query: dict[str, Any], limit: int = 0) -> int:
        count = sum(1 for doc in self.docs if matches(doc, query))
        return min(count, limit) if limit else count

    async def find_one_and_update(
        self,
        query: dict[str, Any],
        update: dict[str, Any],
        return_document: ReturnDocument = ReturnDocument.BEFORE,
    ) -> dict[str, Any] | None:
        for doc in self.docs:
            if matches(doc, query):
                before = copy.deepcopy(doc)
                doc.update(copy.deepcopy(update.get("$set", {})))
                return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def delete_one(self, query: dict[str, Any]) -> DeleteResult:
        self._check_deletes()
        for index, doc in enumerate(self.docs):
            if matches(doc, query):
                del self.docs[index]
                return DeleteResult(deleted_count=1)
        return DeleteResult(deleted_count=0)

    async def delete_many(self, query: dict[str, Any]) -> DeleteResult:
        self._check_deletes()
        kept = [doc for doc in self.docs if not matches(doc, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return DeleteResult(deleted_count=deleted)

    def _check_deletes(self) -> None:
        if self.fail_deletes:
            raise PyMongoError("simulated store failure")


class FakeDatabase:
    def __init__(self) -> None:
        self._collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]
