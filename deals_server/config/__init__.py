"""Configuration helpers for the deals server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

_DEFAULT_SERVER_CONFIG = Path(__file__).resolve().parent / "server.yaml"
_DOTENV_PATH = ".env.local"


@dataclass(frozen=True)
class ListenConfig:
    host: str
    port: int


@dataclass(frozen=True)
class StorageConfig:
    backend: str
    database: str
    products_collection: str
    bids_collection: str
    options: Mapping[str, Any]


@dataclass(frozen=True)
class IdentityConfig:
    service_key: str | None


@dataclass(frozen=True)
class ServerConfig:
    listen: ListenConfig
    storage: StorageConfig
    identity: IdentityConfig
    cors_origins: tuple[str, ...]


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    return yaml.safe_load(path.read_text()) or {}


def load_server_config(path: Path, env: Mapping[str, str] | None = None) -> ServerConfig:
    """Build a ServerConfig from a YAML file with environment overrides applied."""
    env = os.environ if env is None else env
    data = _load_yaml(path)
    listen = data.get("listen", {})
    storage = data.get("storage", {})
    collections = storage.get("collections", {})
    options = dict(storage.get("options") or {})
    if env.get("MONGODB_URI"):
        options["uri"] = env["MONGODB_URI"]
    cors = data.get("cors", {})
    return ServerConfig(
        listen=ListenConfig(
            host=str(env.get("HOST") or listen.get("host", "0.0.0.0")),
            port=int(env.get("PORT") or listen.get("port", 3000)),
        ),
        storage=StorageConfig(
            backend=str(env.get("STORAGE_BACKEND") or storage.get("backend", "mongo")),
            database=str(
                env.get("MONGODB_DATABASE") or storage.get("database", "smartDeals")
            ),
            products_collection=str(collections.get("products", "productsCollection")),
            bids_collection=str(collections.get("bids", "bidsCollection")),
            options=options,
        ),
        identity=IdentityConfig(
            service_key=env.get("FIREBASE_SERVICE_KEY") or None,
        ),
        cors_origins=tuple(cors.get("allow_origins") or ("*",)),
    )


@lru_cache(maxsize=1)
def get_server_config() -> ServerConfig:
    load_dotenv(_DOTENV_PATH)
    path = Path(os.getenv("DEALS_CONFIG_PATH", _DEFAULT_SERVER_CONFIG))
    return load_server_config(path)
