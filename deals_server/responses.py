"""JSON rendering for raw storage documents and write acknowledgments."""

from __future__ import annotations

from typing import Any

import orjson
from bson import ObjectId
from fastapi.responses import JSONResponse


def _default(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    raise TypeError(f"Type is not JSON serializable: {type(value).__name__}")


class DocumentResponse(JSONResponse):
    """Renders documents straight from storage, ObjectIds as their hex string."""

    def render(self, content: Any) -> bytes:
        return orjson.dumps(
            content,
            default=_default,
            option=orjson.OPT_NON_STR_KEYS | orjson.OPT_NAIVE_UTC | orjson.OPT_UTC_Z,
        )
