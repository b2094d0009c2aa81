"""
BizDesk — Invoice API routes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from bizdesk.routes import require_id
from bizdesk.routes.activity import log_activity, log_activity_once
from bizdesk.schemas.invoice import InvoiceCreateRequest, InvoiceUpdateRequest, ReportStatus
from bizdesk.services.activity import to_iso, utcnow
from bizdesk.services.reporting import with_report_status
from bizdesk.services.store import DocumentNotFoundError, DocumentStore, get_store

logger = logging.getLogger(__name__)
invoice_router = APIRouter(prefix="/invoices", tags=["invoices"])

INVOICES = "invoices"


@invoice_router.get("")
async def list_invoices(
    report_status: Optional[ReportStatus] = Query(None, alias="reportStatus"),
    store: DocumentStore = Depends(get_store),
):
    """All invoices, newest first, each carrying its effective report status."""
    try:
        invoices = await store.query(INVOICES, order_by="createdAt", descending=True)
    except Exception as e:
        logger.error(f"Error fetching invoices: {e}")
        raise HTTPException(500, "Failed to fetch invoices")

    invoices = [with_report_status(inv) for inv in invoices]
    if report_status:
        invoices = [inv for inv in invoices if inv["reportStatus"] == report_status.value]
    return invoices


@invoice_router.post("", status_code=201)
async def create_invoice(req: InvoiceCreateRequest, store: DocumentStore = Depends(get_store)):
    """Create a new invoice."""
    now = to_iso(utcnow())
    invoice = {**req.to_document(), "createdAt": now, "updatedAt": now}

    try:
        invoice_id = await store.add(INVOICES, invoice)
    except Exception as e:
        logger.error(f"Error creating invoice: {e}")
        raise HTTPException(500, "Failed to create invoice")

    logger.info(f"✅ Invoice created: {invoice_id} for {req.client_name or 'Client'}")
    await log_activity(
        store, "invoice", "create",
        f"Created invoice for {req.client_name or 'Client'}",
    )
    return {"id": invoice_id, **invoice}


@invoice_router.put("")
async def update_invoice(req: InvoiceUpdateRequest, store: DocumentStore = Depends(get_store)):
    """
    Merge the given fields into an invoice.

    Only an explicit ``activityDescription`` produces an activity entry
    (deduplicated against the latest one); plain field edits never do.
    """
    invoice_id = require_id(req.id)
    data = req.to_document(partial=True, exclude={"id", "activity_description"})

    try:
        await store.update(INVOICES, invoice_id, {**data, "updatedAt": to_iso(utcnow())})
    except DocumentNotFoundError:
        raise HTTPException(404, f"Invoice {invoice_id} not found")
    except Exception as e:
        logger.error(f"Error updating invoice: {e}")
        raise HTTPException(500, "Failed to update invoice")

    if req.activity_description:
        logged = await log_activity_once(store, "invoice", "update", req.activity_description)
        if not logged:
            logger.info(f"No activity entry written for invoice {invoice_id}")

    return {"id": invoice_id, **data}


@invoice_router.delete("")
async def delete_invoice(
    id: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
):
    invoice_id = require_id(id)
    try:
        await store.delete(INVOICES, invoice_id)
    except Exception as e:
        logger.error(f"Error deleting invoice: {e}")
        raise HTTPException(500, "Failed to delete invoice")

    await log_activity(store, "invoice", "delete", f"Deleted invoice {invoice_id}")
    return {"success": True}
