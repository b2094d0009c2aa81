"""
BizDesk — Activity log.

Append-only feed of human-readable events shown on the dashboard. Entries
live in the ``activities`` collection:

    {type, action, description, timestamp, createdAt}

Two ways in:

* ``append_activity`` — unconditional append (create/delete events).
* ``append_activity_once`` — looks at the single most recent entry and
  skips the write when it carries the same description and is younger than
  the dedup window. Only the latest entry is compared, so A, B, A inside
  the window still logs the second A. No lock is held between the read and
  the insert; two concurrent callers can both pass the check.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from bizdesk.services.store import DocumentStore

logger = logging.getLogger(__name__)

ACTIVITY_COLLECTION = "activities"
DEFAULT_DEDUP_WINDOW_MS = 5000


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds")


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def is_duplicate(
    last_entry: Optional[dict],
    description: str,
    now: datetime,
    window_ms: int = DEFAULT_DEDUP_WINDOW_MS,
) -> bool:
    """True when ``last_entry`` repeats ``description`` less than ``window_ms`` ago."""
    if not last_entry:
        return False
    if last_entry.get("description") != description:
        return False
    created_at = last_entry.get("createdAt")
    if not created_at:
        return False
    try:
        created = parse_iso(created_at)
    except (AttributeError, TypeError, ValueError):
        # An unreadable timestamp cannot prove the entry is recent
        logger.warning(f"Unparseable activity timestamp: {created_at!r}")
        return False
    time_diff_ms = (now - created).total_seconds() * 1000
    return time_diff_ms < window_ms


async def latest_activities(store: DocumentStore, limit: int = 20) -> list[dict]:
    """Newest entries first."""
    return await store.query(
        ACTIVITY_COLLECTION, order_by="createdAt", descending=True, limit=limit
    )


async def append_activity(
    store: DocumentStore,
    entity_type: str,
    action: str,
    description: str,
    now: Optional[datetime] = None,
) -> dict:
    """Append one entry and return it (with its id)."""
    stamp = to_iso(now or utcnow())
    entry = {
        "type": entity_type,
        "action": action,
        "description": description,
        "timestamp": stamp,
        "createdAt": stamp,
    }
    entry_id = await store.add(ACTIVITY_COLLECTION, entry)
    return {"id": entry_id, **entry}


async def append_activity_once(
    store: DocumentStore,
    entity_type: str,
    action: str,
    description: str,
    now: Optional[datetime] = None,
    window_ms: int = DEFAULT_DEDUP_WINDOW_MS,
) -> Optional[dict]:
    """
    Append unless the most recent entry already says ``description``
    within ``window_ms``.

    Returns the new entry, or None when the write was suppressed.
    """
    now = now or utcnow()
    recent = await latest_activities(store, limit=1)
    last_entry = recent[0] if recent else None

    if is_duplicate(last_entry, description, now, window_ms):
        logger.info(f"Skipping duplicate activity: {description!r}")
        return None

    return await append_activity(store, entity_type, action, description, now=now)
