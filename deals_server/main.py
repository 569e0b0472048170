from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .auth import build_verifier, decode_service_key
from .config import ServerConfig, get_server_config
from .routes import bids as bid_routes
from .routes import products as product_routes
from .storage import build_storage

logger = logging.getLogger(__name__)

STATUS_MESSAGE = "smart deals server running"


@asynccontextmanager
async def lifespan(app: FastAPI):
    server_config: ServerConfig = app.state.server_config
    service_key = server_config.identity.service_key
    service_account_info = decode_service_key(service_key) if service_key else None
    verifier = build_verifier(service_account_info)
    try:
        storage = build_storage(server_config.storage, service_account_info=service_account_info)
    except Exception:
        verifier.close()
        raise
    try:
        await storage.connect()
    except Exception:
        logger.exception(f"Could not connect to {server_config.storage.backend} storage")
        await storage.close()
        verifier.close()
        raise
    logger.info(
        f"Storage backend {server_config.storage.backend} ready "
        f"(database {server_config.storage.database})"
    )

    app.state.storage = storage
    app.state.products = storage.collection(server_config.storage.products_collection)
    app.state.bids = storage.collection(server_config.storage.bids_collection)
    app.state.verifier = verifier

    try:
        yield
    finally:
        verifier.close()
        await storage.close()


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        {"message": exc.detail},
        status_code=exc.status_code,
        headers=exc.headers,
    )


def create_app(server_config: ServerConfig | None = None) -> FastAPI:
    server_config = server_config or get_server_config()
    app = FastAPI(
        title="Smart Deals Server",
        version="1.0.0",
        docs_url="/docs",
        lifespan=lifespan,
    )
    app.state.server_config = server_config
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(server_config.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.include_router(product_routes.router)
    app.include_router(bid_routes.router)

    @app.get("/", tags=["meta"], response_class=PlainTextResponse)
    async def root() -> str:
        return STATUS_MESSAGE

    return app


app = create_app()
