"""
BizDesk — Rental item and rental agreement API routes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from bizdesk.routes.activity import log_activity
from bizdesk.routes.records import create_document, delete_document, list_documents, update_document
from bizdesk.schemas.records import (
    RentalAgreementCreateRequest, RentalAgreementStatus, RentalAgreementUpdateRequest,
    RentalItemCreateRequest,
)
from bizdesk.services.store import DocumentStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/rentals", tags=["rentals"])


# ── Items ───────────────────────────────────────────────

@router.get("/items")
async def list_rental_items(store: DocumentStore = Depends(get_store)):
    return await list_documents(store, "rental_items", "rental items", "name")


@router.post("/items", status_code=201)
async def create_rental_item(req: RentalItemCreateRequest, store: DocumentStore = Depends(get_store)):
    item = await create_document(store, "rental_items", "rental item", req)
    await log_activity(store, "rental_item", "create", f"Added rental item: {req.name}")
    return item


@router.delete("/items")
async def delete_rental_item(id: Optional[str] = Query(None), store: DocumentStore = Depends(get_store)):
    await delete_document(store, "rental_items", "rental item", id)
    return {"success": True}


# ── Agreements ──────────────────────────────────────────

@router.get("/agreements")
async def list_rental_agreements(store: DocumentStore = Depends(get_store)):
    return await list_documents(store, "rental_agreements", "rental agreements", "startDate", descending=True)


@router.post("/agreements", status_code=201)
async def create_rental_agreement(req: RentalAgreementCreateRequest, store: DocumentStore = Depends(get_store)):
    """New agreements always start Active. Item stock is managed by hand."""
    agreement = await create_document(
        store, "rental_agreements", "rental agreement", req,
        status=RentalAgreementStatus.ACTIVE.value,
    )
    await log_activity(
        store, "rental_agreement", "create",
        f"New rental agreement for {req.client_name}: {req.item_name}",
    )
    return agreement


@router.put("/agreements")
async def update_rental_agreement(req: RentalAgreementUpdateRequest, store: DocumentStore = Depends(get_store)):
    agreement_id, _ = await update_document(store, "rental_agreements", "rental agreement", req)
    return {"success": True, "id": agreement_id}
