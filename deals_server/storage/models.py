"""Write acknowledgments returned by every storage backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class InsertResult:
    inserted_id: Any
    acknowledged: bool = True

    def as_dict(self) -> dict[str, Any]:
        return {"acknowledged": self.acknowledged, "insertedId": self.inserted_id}


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int
    modified_count: int
    upserted_id: Any = None
    acknowledged: bool = True

    def as_dict(self) -> dict[str, Any]:
        return {
            "acknowledged": self.acknowledged,
            "matchedCount": self.matched_count,
            "modifiedCount": self.modified_count,
            "upsertedId": self.upserted_id,
            "upsertedCount": 1 if self.upserted_id is not None else 0,
        }


@dataclass(frozen=True)
class DeleteResult:
    deleted_count: int
    acknowledged: bool = True

    def as_dict(self) -> dict[str, Any]:
        return {"acknowledged": self.acknowledged, "deletedCount": self.deleted_count}
