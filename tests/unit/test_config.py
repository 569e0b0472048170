"""Unit tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from deals_server.config import load_server_config

DEFAULT_CONFIG = Path(__file__).resolve().parents[2] / "deals_server" / "config" / "server.yaml"


def test_packaged_defaults():
    config = load_server_config(DEFAULT_CONFIG, env={})
    assert config.listen.port == 3000
    assert config.storage.backend == "mongo"
    assert config.storage.database == "smartDeals"
    assert config.storage.products_collection == "productsCollection"
    assert config.storage.bids_collection == "bidsCollection"
    assert config.identity.service_key is None
    assert config.cors_origins == ("*",)


def test_environment_overrides():
    env = {
        "PORT": "8080",
        "MONGODB_URI": "mongodb+srv://user:pw@cluster.example.net",
        "MONGODB_DATABASE": "dealsStaging",
        "STORAGE_BACKEND": "in_memory",
        "FIREBASE_SERVICE_KEY": "e30=",
    }
    config = load_server_config(DEFAULT_CONFIG, env=env)
    assert config.listen.port == 8080
    assert config.storage.options["uri"] == env["MONGODB_URI"]
    assert config.storage.database == "dealsStaging"
    assert config.storage.backend == "in_memory"
    assert config.identity.service_key == "e30="


def test_yaml_values(tmp_path):
    path = tmp_path / "server.yaml"
    path.write_text(
        "listen:\n  port: 4000\n"
        "storage:\n  backend: firestore\n  options:\n    project_id: deals-dev\n"
        "  collections:\n    products: products\n"
    )
    config = load_server_config(path, env={})
    assert config.listen.port == 4000
    assert config.storage.backend == "firestore"
    assert config.storage.options == {"project_id": "deals-dev"}
    assert config.storage.products_collection == "products"
    assert config.storage.bids_collection == "bidsCollection"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_server_config(tmp_path / "absent.yaml", env={})
