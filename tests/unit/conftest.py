from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from deals_server.config import IdentityConfig, ListenConfig, ServerConfig, StorageConfig
from deals_server.main import create_app
from deals_server.storage.in_memory import InMemoryStorage

from .support import TOKENS, FakeVerifier


@pytest.fixture
def server_config() -> ServerConfig:
    return ServerConfig(
        listen=ListenConfig(host="127.0.0.1", port=3000),
        storage=StorageConfig(
            backend="in_memory",
            database="smartDeals",
            products_collection="productsCollection",
            bids_collection="bidsCollection",
            options={},
        ),
        identity=IdentityConfig(service_key=None),
        cors_origins=("*",),
    )


@pytest.fixture
def verifier() -> FakeVerifier:
    return FakeVerifier(TOKENS)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def app(server_config, storage, verifier):
    app = create_app(server_config)
    app.state.storage = storage
    app.state.products = storage.collection(server_config.storage.products_collection)
    app.state.bids = storage.collection(server_config.storage.bids_collection)
    app.state.verifier = verifier
    return app


@pytest.fixture
def client(app) -> TestClient:
    # No context manager: the lifespan would replace the injected backends.
    return TestClient(app)
