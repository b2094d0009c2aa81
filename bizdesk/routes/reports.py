"""
BizDesk — Dashboard / report summary route.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from bizdesk.config import settings
from bizdesk.services.activity import latest_activities
from bizdesk.services.reporting import summarize_invoices
from bizdesk.services.store import DocumentStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/summary")
async def report_summary(store: DocumentStore = Depends(get_store)):
    """Revenue, released/pending invoice counts, head counts and the activity feed."""
    try:
        invoices = await store.query("invoices")
        employees = await store.query("employees")
        quotations = await store.query("quotations")
        activities = await latest_activities(store, limit=settings.activity_feed_limit)
    except Exception as e:
        logger.error(f"Failed to build report summary: {e}")
        raise HTTPException(500, "Failed to fetch report summary")

    return {
        **summarize_invoices(invoices),
        "employees": len(employees),
        "quotations": len(quotations),
        "activities": activities,
    }
