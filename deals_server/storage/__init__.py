"""Storage backend factory."""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from ..config import StorageConfig
from .firestore import FirestoreStorage
from .in_memory import InMemoryStorage
from .models import DeleteResult, InsertResult, UpdateResult
from .mongo import MongoStorage

CREATED_AT = "created_at"


class DocumentCollection(Protocol):
    async def find(
        self,
        filter: Mapping[str, Any] | None = None,
        *,
        sort: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        """Return matching documents, sorted descending on `sort` when given."""
        ...

    async def find_by_id(self, doc_id: str) -> dict | None: ...

    async def insert_one(self, document: dict) -> InsertResult: ...

    async def update_by_id(self, doc_id: str, fields: dict) -> UpdateResult:
        """Overwrite the given top-level fields, leaving the others untouched."""
        ...

    async def delete_by_id(self, doc_id: str) -> DeleteResult: ...


class DocumentStorage(Protocol):
    async def connect(self) -> None: ...

    async def close(self) -> None: ...

    def collection(self, name: str) -> DocumentCollection: ...


def build_storage(
    config: StorageConfig,
    *,
    service_account_info: Mapping[str, Any] | None = None,
) -> DocumentStorage:
    backend = config.backend
    options = dict(config.options)
    if backend == "in_memory":
        return InMemoryStorage()
    if backend == "mongo":
        return MongoStorage(database=config.database, **options)
    if backend == "firestore":
        options.setdefault("credentials_info", service_account_info)
        return FirestoreStorage(**options)
    raise ValueError(f"unknown storage backend {backend}")


__all__ = [
    "CREATED_AT",
    "DeleteResult",
    "DocumentCollection",
    "DocumentStorage",
    "InsertResult",
    "UpdateResult",
    "build_storage",
]
