"""Firestore storage backend leveraging google-cloud-firestore."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Mapping

from bson import ObjectId
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account

from .models import DeleteResult, InsertResult, UpdateResult


async def _run(func: Callable, *args, **kwargs):
    return await asyncio.to_thread(func, *args, **kwargs)


def _with_id(snapshot) -> dict[str, Any]:
    document = snapshot.to_dict() or {}
    document["_id"] = snapshot.id
    return document


class FirestoreCollection:
    """Documents are keyed by the hex of a generated ObjectId, kept in `_id` on read."""

    def __init__(self, collection) -> None:
        self._collection = collection

    async def find(
        self,
        filter: Mapping[str, Any] | None = None,
        *,
        sort: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        query = self._collection
        for field, value in (filter or {}).items():
            query = query.where(filter=FieldFilter(field, "==", value))
        if sort:
            query = query.order_by(sort, direction=firestore.Query.DESCENDING)
        if limit:
            query = query.limit(limit)
        snapshots = await _run(lambda: list(query.stream()))
        return [_with_id(snapshot) for snapshot in snapshots]

    async def find_by_id(self, doc_id: str) -> dict[str, Any] | None:
        snapshot = await _run(self._collection.document(str(ObjectId(doc_id))).get)
        if not snapshot.exists:
            return None
        return _with_id(snapshot)

    async def insert_one(self, document: dict[str, Any]) -> InsertResult:
        document.setdefault("_id", ObjectId())
        doc_id = str(document["_id"])
        payload = {key: value for key, value in document.items() if key != "_id"}
        await _run(self._collection.document(doc_id).create, payload)
        return InsertResult(inserted_id=document["_id"])

    async def update_by_id(self, doc_id: str, fields: dict[str, Any]) -> UpdateResult:
        if not fields:
            raise ValueError("no fields to update")
        if "_id" in fields:
            raise ValueError("the _id field is immutable")
        ref = self._collection.document(str(ObjectId(doc_id)))
        snapshot = await _run(ref.get)
        if not snapshot.exists:
            return UpdateResult(matched_count=0, modified_count=0)
        current = snapshot.to_dict() or {}
        if all(name in current and current[name] == value for name, value in fields.items()):
            return UpdateResult(matched_count=1, modified_count=0)
        await _run(ref.update, fields)
        return UpdateResult(matched_count=1, modified_count=1)

    async def delete_by_id(self, doc_id: str) -> DeleteResult:
        ref = self._collection.document(str(ObjectId(doc_id)))
        snapshot = await _run(ref.get)
        if not snapshot.exists:
            return DeleteResult(deleted_count=0)
        await _run(ref.delete)
        return DeleteResult(deleted_count=1)


class FirestoreStorage:
    def __init__(
        self,
        *,
        project_id: str | None = None,
        credentials_info: Mapping[str, Any] | None = None,
        credentials_path: str | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {}
        if credentials_path:
            client_kwargs["credentials"] = service_account.Credentials.from_service_account_file(
                credentials_path
            )
        elif credentials_info:
            client_kwargs["credentials"] = service_account.Credentials.from_service_account_info(
                dict(credentials_info)
            )
            project_id = project_id or credentials_info.get("project_id")
        if not project_id:
            raise ValueError("project_id required for firestore backend")
        client_kwargs["project"] = project_id
        self._client = firestore.Client(**client_kwargs)

    async def connect(self) -> None:
        return None

    async def close(self) -> None:
        await _run(self._client.close)

    def collection(self, name: str) -> FirestoreCollection:
        return FirestoreCollection(self._client.collection(name))
