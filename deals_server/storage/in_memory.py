"""In-memory storage backend mirroring the document store's single-document semantics."""

from __future__ import annotations

import asyncio
from copy import deepcopy
from typing import Any, Mapping

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, WriteError

from .models import DeleteResult, InsertResult, UpdateResult

_MISSING = object()


def _sort_key(value: Any) -> tuple[int, Any]:
    # BSON comparison order: null < numbers < strings < objects < arrays < booleans
    if value is _MISSING or value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (5, value)
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    if isinstance(value, dict):
        return (3, str(sorted(value.items())))
    if isinstance(value, list):
        return (4, str(value))
    return (6, str(value))


def _matches(document: Mapping[str, Any], filter: Mapping[str, Any]) -> bool:
    return all(document.get(key, _MISSING) == value for key, value in filter.items())


class InMemoryCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self._documents: dict[Any, dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def find(
        self,
        filter: Mapping[str, Any] | None = None,
        *,
        sort: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        async with self._lock:
            documents = [
                deepcopy(document)
                for document in self._documents.values()
                if _matches(document, filter or {})
            ]
        if sort:
            documents.sort(key=lambda doc: _sort_key(doc.get(sort, _MISSING)), reverse=True)
        if limit:
            documents = documents[:limit]
        return documents

    async def find_by_id(self, doc_id: str) -> dict[str, Any] | None:
        key = ObjectId(doc_id)
        async with self._lock:
            document = self._documents.get(key)
            return deepcopy(document) if document is not None else None

    async def insert_one(self, document: dict[str, Any]) -> InsertResult:
        document.setdefault("_id", ObjectId())
        key = document["_id"]
        async with self._lock:
            if key in self._documents:
                raise DuplicateKeyError(f"duplicate key {key!r} in {self.name}")
            self._documents[key] = deepcopy(document)
        return InsertResult(inserted_id=key)

    async def update_by_id(self, doc_id: str, fields: dict[str, Any]) -> UpdateResult:
        key = ObjectId(doc_id)
        if not fields:
            raise WriteError("'$set' is empty", code=9)
        async with self._lock:
            document = self._documents.get(key)
            if document is None:
                return UpdateResult(matched_count=0, modified_count=0)
            if "_id" in fields and fields["_id"] != document["_id"]:
                raise WriteError(
                    "Performing an update on the path '_id' would modify the immutable field '_id'",
                    code=66,
                )
            changed = any(
                document.get(name, _MISSING) != value for name, value in fields.items()
            )
            document.update(deepcopy(fields))
        return UpdateResult(matched_count=1, modified_count=1 if changed else 0)

    async def delete_by_id(self, doc_id: str) -> DeleteResult:
        key = ObjectId(doc_id)
        async with self._lock:
            removed = self._documents.pop(key, None)
        return DeleteResult(deleted_count=0 if removed is None else 1)


class InMemoryStorage:
    def __init__(self) -> None:
        self._collections: dict[str, InMemoryCollection] = {}

    async def connect(self) -> None:
        return None

    async def close(self) -> None:
        return None

    def collection(self, name: str) -> InMemoryCollection:
        if name not in self._collections:
            self._collections[name] = InMemoryCollection(name)
        return self._collections[name]
