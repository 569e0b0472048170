"""MongoDB storage backend leveraging pymongo's asyncio client."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from bson import ObjectId
from pymongo import DESCENDING, AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.server_api import ServerApi

from .models import DeleteResult, InsertResult, UpdateResult

logger = logging.getLogger(__name__)


class MongoCollection:
    def __init__(self, collection: AsyncCollection) -> None:
        self._collection = collection

    async def find(
        self,
        filter: Mapping[str, Any] | None = None,
        *,
        sort: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        cursor = self._collection.find(dict(filter or {}))
        if sort:
            cursor = cursor.sort(sort, DESCENDING)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=None)

    async def find_by_id(self, doc_id: str) -> dict[str, Any] | None:
        return await self._collection.find_one({"_id": ObjectId(doc_id)})

    async def insert_one(self, document: dict[str, Any]) -> InsertResult:
        result = await self._collection.insert_one(document)
        return InsertResult(inserted_id=result.inserted_id, acknowledged=result.acknowledged)

    async def update_by_id(self, doc_id: str, fields: dict[str, Any]) -> UpdateResult:
        result = await self._collection.update_one(
            {"_id": ObjectId(doc_id)}, {"$set": fields}
        )
        return UpdateResult(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=result.upserted_id,
            acknowledged=result.acknowledged,
        )

    async def delete_by_id(self, doc_id: str) -> DeleteResult:
        result = await self._collection.delete_one({"_id": ObjectId(doc_id)})
        return DeleteResult(deleted_count=result.deleted_count, acknowledged=result.acknowledged)


class MongoStorage:
    def __init__(self, *, uri: str | None = None, database: str, **client_kwargs: Any) -> None:
        if not uri:
            raise ValueError("mongo connection string missing (set MONGODB_URI)")
        self._client: AsyncMongoClient = AsyncMongoClient(
            uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            tz_aware=client_kwargs.pop("tz_aware", True),
            **client_kwargs,
        )
        self._database = self._client[database]

    async def connect(self) -> None:
        await self._client.admin.command("ping")
        logger.info(f"Connected to MongoDB database {self._database.name}")

    async def close(self) -> None:
        await self._client.close()

    def collection(self, name: str) -> MongoCollection:
        return MongoCollection(self._database[name])
