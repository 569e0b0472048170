"""Decoding of the base64 service-account blob carried in the environment."""

from __future__ import annotations

import base64
import binascii
import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator, ValidationError

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "service_account.json"


class CredentialError(ValueError):
    """Raised when the service credential blob cannot be decoded or is malformed."""


@lru_cache(maxsize=1)
def _service_account_validator() -> Draft202012Validator:
    schema = json.loads(_SCHEMA_PATH.read_text())
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def decode_service_key(blob: str) -> dict[str, Any]:
    """Return the service-account mapping encoded as base64 JSON in `blob`."""
    if not blob:
        raise CredentialError("service key missing")
    # `base64` on the command line wraps its output
    compact = "".join(blob.split())
    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CredentialError("service key is not base64") from exc
    try:
        info = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CredentialError("service key is not a JSON document") from exc
    try:
        _service_account_validator().validate(info)
    except ValidationError as exc:
        raise CredentialError(f"invalid service key: {exc.message}") from exc
    return info


def encode_service_key(info: dict[str, Any]) -> str:
    return base64.b64encode(json.dumps(info).encode("utf-8")).decode("ascii")
