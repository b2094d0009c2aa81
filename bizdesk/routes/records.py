"""
BizDesk — Employee, Quotation, Payment, Expense and Contact API routes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from bizdesk.routes import require_id
from bizdesk.routes.activity import log_activity
from bizdesk.schemas import RequestModel
from bizdesk.schemas.records import (
    ContactCreateRequest,
    EmployeeCreateRequest, EmployeeUpdateRequest,
    ExpenseCreateRequest,
    PaymentCreateRequest, PaymentUpdateRequest,
    QuotationCreateRequest, QuotationUpdateRequest,
)
from bizdesk.services.activity import to_iso, utcnow
from bizdesk.services.store import DocumentNotFoundError, DocumentStore, get_store

logger = logging.getLogger(__name__)
employee_router = APIRouter(prefix="/employees", tags=["employees"])
quotation_router = APIRouter(prefix="/quotations", tags=["quotations"])
payment_router = APIRouter(prefix="/payments", tags=["payments"])
expense_router = APIRouter(prefix="/expenses", tags=["expenses"])
contact_router = APIRouter(prefix="/contacts", tags=["contacts"])


# ═══════════════════════════════════════════════════════
#  Shared store plumbing
# ═══════════════════════════════════════════════════════

async def list_documents(
    store: DocumentStore,
    collection: str,
    noun: str,
    order_by: str,
    descending: bool = False,
) -> list[dict]:
    try:
        return await store.query(collection, order_by=order_by, descending=descending)
    except Exception as e:
        logger.error(f"Error fetching {noun}: {e}")
        raise HTTPException(500, f"Failed to fetch {noun}")


async def create_document(
    store: DocumentStore,
    collection: str,
    noun: str,
    req: RequestModel,
    **overrides,
) -> dict:
    """Insert ``req`` with fresh timestamps; returns the stored document with its id."""
    now = to_iso(utcnow())
    doc = {**req.to_document(), **overrides, "createdAt": now, "updatedAt": now}
    try:
        doc_id = await store.add(collection, doc)
    except Exception as e:
        logger.error(f"Error creating {noun}: {e}")
        raise HTTPException(500, f"Failed to create {noun}")
    return {"id": doc_id, **doc}


async def update_document(
    store: DocumentStore,
    collection: str,
    noun: str,
    req: RequestModel,
) -> tuple[str, dict]:
    """Merge the fields the client sent; returns ``(id, merged_fields)``."""
    doc_id = require_id(getattr(req, "id", None))
    data = req.to_document(partial=True, exclude={"id"})
    try:
        await store.update(collection, doc_id, {**data, "updatedAt": to_iso(utcnow())})
    except DocumentNotFoundError:
        raise HTTPException(404, f"{noun.capitalize()} {doc_id} not found")
    except Exception as e:
        logger.error(f"Error updating {noun}: {e}")
        raise HTTPException(500, f"Failed to update {noun}")
    return doc_id, data


async def delete_document(
    store: DocumentStore,
    collection: str,
    noun: str,
    doc_id: Optional[str],
) -> str:
    doc_id = require_id(doc_id)
    try:
        await store.delete(collection, doc_id)
    except Exception as e:
        logger.error(f"Error deleting {noun}: {e}")
        raise HTTPException(500, f"Failed to delete {noun}")
    return doc_id


# ═══════════════════════════════════════════════════════
#  Employees
# ═══════════════════════════════════════════════════════

@employee_router.get("")
async def list_employees(store: DocumentStore = Depends(get_store)):
    return await list_documents(store, "employees", "employees", "createdAt", descending=True)


@employee_router.post("", status_code=201)
async def create_employee(req: EmployeeCreateRequest, store: DocumentStore = Depends(get_store)):
    employee = await create_document(store, "employees", "employee", req)
    await log_activity(
        store, "employee", "create",
        f"Added employee {req.first_name} {req.last_name}".strip(),
    )
    return employee


@employee_router.put("")
async def update_employee(req: EmployeeUpdateRequest, store: DocumentStore = Depends(get_store)):
    employee_id, data = await update_document(store, "employees", "employee", req)
    await log_activity(store, "employee", "update", f"Updated employee {employee_id}")
    return {"id": employee_id, **data}


@employee_router.delete("")
async def delete_employee(id: Optional[str] = Query(None), store: DocumentStore = Depends(get_store)):
    employee_id = await delete_document(store, "employees", "employee", id)
    await log_activity(store, "employee", "delete", f"Deleted employee {employee_id}")
    return {"success": True}


# ═══════════════════════════════════════════════════════
#  Quotations
# ═══════════════════════════════════════════════════════

@quotation_router.get("")
async def list_quotations(store: DocumentStore = Depends(get_store)):
    return await list_documents(store, "quotations", "quotations", "createdAt", descending=True)


@quotation_router.post("", status_code=201)
async def create_quotation(req: QuotationCreateRequest, store: DocumentStore = Depends(get_store)):
    quotation = await create_document(store, "quotations", "quotation", req)
    await log_activity(
        store, "quotation", "create",
        f"Created quotation for {req.client_name or 'Client'}",
    )
    return quotation


@quotation_router.put("")
async def update_quotation(req: QuotationUpdateRequest, store: DocumentStore = Depends(get_store)):
    # Quotation edits are not logged; only additions and deletions show on the feed
    quotation_id, data = await update_document(store, "quotations", "quotation", req)
    return {"id": quotation_id, **data}


@quotation_router.delete("")
async def delete_quotation(id: Optional[str] = Query(None), store: DocumentStore = Depends(get_store)):
    quotation_id = await delete_document(store, "quotations", "quotation", id)
    await log_activity(store, "quotation", "delete", f"Deleted quotation {quotation_id}")
    return {"success": True}


# ═══════════════════════════════════════════════════════
#  Payments
# ═══════════════════════════════════════════════════════

@payment_router.get("")
async def list_payments(store: DocumentStore = Depends(get_store)):
    return await list_documents(store, "payments", "payments", "createdAt", descending=True)


@payment_router.post("", status_code=201)
async def create_payment(req: PaymentCreateRequest, store: DocumentStore = Depends(get_store)):
    """Record a payment; a linked invoice is marked Paid."""
    payment = await create_document(store, "payments", "payment", req)

    if req.invoice_id:
        try:
            await store.update("invoices", req.invoice_id, {
                "status": "Paid",
                "updatedAt": payment["createdAt"],
            })
        except Exception as e:
            logger.warning(f"Failed to update invoice status for {req.invoice_id}: {e}")

    return payment


@payment_router.put("")
async def update_payment(req: PaymentUpdateRequest, store: DocumentStore = Depends(get_store)):
    payment_id, data = await update_document(store, "payments", "payment", req)
    return {"id": payment_id, **data}


@payment_router.delete("")
async def delete_payment(id: Optional[str] = Query(None), store: DocumentStore = Depends(get_store)):
    await delete_document(store, "payments", "payment", id)
    return {"success": True}


# ═══════════════════════════════════════════════════════
#  Expenses
# ═══════════════════════════════════════════════════════

@expense_router.get("")
async def list_expenses(store: DocumentStore = Depends(get_store)):
    return await list_documents(store, "expenses", "expenses", "date", descending=True)


@expense_router.post("", status_code=201)
async def create_expense(req: ExpenseCreateRequest, store: DocumentStore = Depends(get_store)):
    """Record an expense; an undated expense is dated today so it lists by date."""
    expense = await create_document(
        store, "expenses", "expense", req,
        date=req.date or utcnow().date().isoformat(),
    )
    await log_activity(store, "expense", "create", f"Added expense: {req.description}")
    return expense


@expense_router.delete("")
async def delete_expense(id: Optional[str] = Query(None), store: DocumentStore = Depends(get_store)):
    await delete_document(store, "expenses", "expense", id)
    return {"success": True}


# ═══════════════════════════════════════════════════════
#  Contacts
# ═══════════════════════════════════════════════════════

@contact_router.get("")
async def list_contacts(store: DocumentStore = Depends(get_store)):
    return await list_documents(store, "contacts", "contacts", "name")


@contact_router.post("", status_code=201)
async def create_contact(req: ContactCreateRequest, store: DocumentStore = Depends(get_store)):
    contact = await create_document(store, "contacts", "contact", req)
    await log_activity(store, "contact", "create", f"Added contact: {req.name} ({req.company})")
    return contact


@contact_router.delete("")
async def delete_contact(id: Optional[str] = Query(None), store: DocumentStore = Depends(get_store)):
    await delete_document(store, "contacts", "contact", id)
    return {"success": True}
