"""
API Routes — health and helpers shared by the resource routers.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from bizdesk.schemas import HealthResponse
from bizdesk.services.store import DocumentStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


def require_id(doc_id: Optional[str]) -> str:
    """400 unless the request named a document id."""
    if not doc_id:
        raise HTTPException(status_code=400, detail="ID is required")
    return doc_id


# ── Health ──────────────────────────────────────────────

@router.get("/health", response_model=HealthResponse, tags=["system"])
async def health(store: DocumentStore = Depends(get_store)):
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        store=store.name,
    )
