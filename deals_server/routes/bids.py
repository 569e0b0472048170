"""Bid endpoints. Every route requires a verified identity."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from ..auth import assert_owner, require_verified_email
from ..responses import DocumentResponse
from ..storage import CREATED_AT, DocumentCollection

router = APIRouter(prefix="/bids", tags=["bids"])


def _get_bids(request: Request) -> DocumentCollection:
    return request.app.state.bids


@router.post("")
async def create_bid(
    payload: dict[str, Any] = Body(...),
    _: str = Depends(require_verified_email),
    bids: DocumentCollection = Depends(_get_bids),
):
    result = await bids.insert_one(payload)
    return DocumentResponse(result.as_dict())


@router.get("/product/{product_id}")
async def list_product_bids(
    product_id: str,
    _: str = Depends(require_verified_email),
    bids: DocumentCollection = Depends(_get_bids),
):
    documents = await bids.find({"product_id": product_id}, sort=CREATED_AT)
    return DocumentResponse(documents)


@router.get("/user/{email}")
async def list_user_bids(
    email: str,
    verified_email: str = Depends(require_verified_email),
    bids: DocumentCollection = Depends(_get_bids),
):
    assert_owner(verified_email, email)
    documents = await bids.find({"buyer_email": email}, sort=CREATED_AT)
    return DocumentResponse(documents)


@router.delete("/{bid_id}")
async def delete_bid(
    bid_id: str,
    _: str = Depends(require_verified_email),
    bids: DocumentCollection = Depends(_get_bids),
):
    result = await bids.delete_by_id(bid_id)
    return DocumentResponse(result.as_dict())
