"""Product endpoints."""

from __future__ import annotations

import re
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request

from ..auth import assert_owner, require_verified_email
from ..responses import DocumentResponse
from ..storage import CREATED_AT, DocumentCollection

router = APIRouter(tags=["products"])

DEFAULT_RECENT_LIMIT = 6

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _get_products(request: Request) -> DocumentCollection:
    return request.app.state.products


def parse_limit(raw: str | None, default: int = DEFAULT_RECENT_LIMIT) -> int:
    """Read a leading integer from `raw`; zero or unparsable input yields `default`.

    A negative limit caps the result at its absolute value.
    """
    match = _LEADING_INT.match(raw or "")
    if not match:
        return default
    value = int(match.group(1))
    return abs(value) or default


@router.get("/products")
async def list_products(products: DocumentCollection = Depends(_get_products)):
    return DocumentResponse(await products.find(sort=CREATED_AT))


@router.get("/recentProducts")
async def list_recent_products(
    limit: str | None = Query(None),
    products: DocumentCollection = Depends(_get_products),
):
    documents = await products.find(sort=CREATED_AT, limit=parse_limit(limit))
    return DocumentResponse(documents)


@router.get("/products/{product_id}")
async def get_product(product_id: str, products: DocumentCollection = Depends(_get_products)):
    return DocumentResponse(await products.find_by_id(product_id))


@router.post("/products")
async def create_product(
    payload: dict[str, Any] = Body(...),
    _: str = Depends(require_verified_email),
    products: DocumentCollection = Depends(_get_products),
):
    result = await products.insert_one(payload)
    return DocumentResponse(result.as_dict())


@router.get("/myProducts/{email}")
async def list_my_products(
    email: str,
    verified_email: str = Depends(require_verified_email),
    products: DocumentCollection = Depends(_get_products),
):
    assert_owner(verified_email, email)
    documents = await products.find({"email": email}, sort=CREATED_AT)
    return DocumentResponse(documents)


@router.put("/products/{product_id}")
async def update_product(
    product_id: str,
    payload: dict[str, Any] = Body(...),
    _: str = Depends(require_verified_email),
    products: DocumentCollection = Depends(_get_products),
):
    result = await products.update_by_id(product_id, payload)
    return DocumentResponse(result.as_dict())


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: str,
    _: str = Depends(require_verified_email),
    products: DocumentCollection = Depends(_get_products),
):
    result = await products.delete_by_id(product_id)
    return DocumentResponse(result.as_dict())
