"""
BizDesk — Activity Log API routes.
Provides the dashboard feed and the log writers the other routes call.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from bizdesk.config import settings
from bizdesk.services.activity import append_activity, append_activity_once, latest_activities
from bizdesk.services.store import DocumentStore, get_store

logger = logging.getLogger(__name__)
activity_router = APIRouter(prefix="/activities", tags=["activity"])


# ═══════════════════════════════════════════════════════
#  Helpers: log writers that never fail the caller
# ═══════════════════════════════════════════════════════

async def log_activity(
    store: DocumentStore,
    entity_type: str,
    action: str,
    description: str,
) -> None:
    """Fire-and-forget append. Failures are only logged."""
    try:
        await append_activity(store, entity_type, action, description)
    except Exception as e:
        logger.warning(f"Failed to write activity log: {e}")


async def log_activity_once(
    store: DocumentStore,
    entity_type: str,
    action: str,
    description: str,
) -> bool:
    """
    Deduplicated append. Returns True when a new entry was written, False
    when it was suppressed as a duplicate or the write failed.
    """
    try:
        entry = await append_activity_once(
            store, entity_type, action, description,
            window_ms=settings.activity_dedup_window_ms,
        )
    except Exception as e:
        logger.warning(f"Failed to write activity log: {e}")
        return False
    return entry is not None


# ═══════════════════════════════════════════════════════
#  API Endpoints
# ═══════════════════════════════════════════════════════

@activity_router.get("")
async def list_activities(
    limit: int | None = Query(None, ge=1, le=100),
    store: DocumentStore = Depends(get_store),
):
    """Latest activity entries, newest first."""
    try:
        return await latest_activities(store, limit=limit or settings.activity_feed_limit)
    except Exception as e:
        logger.error(f"Error fetching activities: {e}")
        raise HTTPException(500, "Failed to fetch activities")
