"""
BizDesk — Document store interface, in-memory backend and backend selection.

Every backend speaks the same small dialect: collection-scoped add / get /
update / set / delete plus a query with equality filters, one sort key and
an optional limit. Documents come back as plain dicts with their ``id``
merged in.
"""

import itertools
import logging
import uuid
from typing import Any, Optional

logger = logging.getLogger(__name__)


class DocumentStoreError(Exception):
    """Any failure raised by a document store backend."""


class DocumentNotFoundError(DocumentStoreError):
    """Update targeted a document that does not exist."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"{collection}/{doc_id} not found")
        self.collection = collection
        self.doc_id = doc_id


class DocumentStore:
    """Async document store contract shared by all backends."""

    name = "base"

    async def add(self, collection: str, data: dict) -> str:
        """Insert a new document and return its generated id."""
        raise NotImplementedError

    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        raise NotImplementedError

    async def update(self, collection: str, doc_id: str, fields: dict) -> None:
        """Shallow-merge ``fields`` into an existing document.

        Raises DocumentNotFoundError when the document is missing.
        """
        raise NotImplementedError

    async def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> None:
        """Create or overwrite a document under a caller-chosen id."""
        raise NotImplementedError

    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""
        raise NotImplementedError

    async def query(
        self,
        collection: str,
        *,
        where: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """Equality-filtered, optionally ordered and limited listing.

        When ``order_by`` is given, documents lacking that field are left
        out, matching Firestore semantics.
        """
        raise NotImplementedError

    async def close(self) -> None:
        return None


# ═══════════════════════════════════════════════════════
#  In-memory backend
# ═══════════════════════════════════════════════════════

class MemoryDocumentStore(DocumentStore):
    """Process-local store used for development and tests. Nothing persists."""

    name = "memory"

    def __init__(self):
        self._data: dict[str, dict[str, tuple[int, dict]]] = {}
        self._seq = itertools.count()

    def _collection(self, name: str) -> dict[str, tuple[int, dict]]:
        return self._data.setdefault(name, {})

    async def add(self, collection: str, data: dict) -> str:
        doc_id = uuid.uuid4().hex[:20]
        self._collection(collection)[doc_id] = (next(self._seq), dict(data))
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        entry = self._collection(collection).get(doc_id)
        if entry is None:
            return None
        return {"id": doc_id, **entry[1]}

    async def update(self, collection: str, doc_id: str, fields: dict) -> None:
        docs = self._collection(collection)
        if doc_id not in docs:
            raise DocumentNotFoundError(collection, doc_id)
        seq, data = docs[doc_id]
        docs[doc_id] = (seq, {**data, **fields})

    async def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> None:
        docs = self._collection(collection)
        existing = docs.get(doc_id)
        if existing is None:
            docs[doc_id] = (next(self._seq), dict(data))
        elif merge:
            docs[doc_id] = (existing[0], {**existing[1], **data})
        else:
            docs[doc_id] = (existing[0], dict(data))

    async def delete(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)

    async def query(
        self,
        collection: str,
        *,
        where: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        rows = [
            (seq, doc_id, data)
            for doc_id, (seq, data) in self._collection(collection).items()
            if all(data.get(k) == v for k, v in (where or {}).items())
        ]
        if order_by:
            rows = [r for r in rows if r[2].get(order_by) is not None]
            rows.sort(key=lambda r: (r[2][order_by], r[0]), reverse=descending)
        else:
            rows.sort(key=lambda r: r[0])
        if limit is not None:
            rows = rows[:limit]
        return [{"id": doc_id, **data} for _, doc_id, data in rows]


# ═══════════════════════════════════════════════════════
#  Backend selection + FastAPI dependency
# ═══════════════════════════════════════════════════════

_store: Optional[DocumentStore] = None


def build_store(backend: str, *, cred_path: str = "", project_id: str = "") -> DocumentStore:
    """
    Instantiate the configured backend.

    A Firestore backend that cannot be initialised falls back to the
    in-memory store so the API still starts in development.
    """
    backend = (backend or "sql").lower()

    if backend == "memory":
        logger.warning("⚠️ Using in-memory document store — data will NOT be persisted")
        return MemoryDocumentStore()

    if backend == "firestore":
        from bizdesk.services.firebase import FirestoreDocumentStore, init_firebase

        if init_firebase(cred_path=cred_path, project_id=project_id):
            return FirestoreDocumentStore()
        logger.warning(
            "⚠️ Firestore unavailable — falling back to in-memory store. "
            "Data will NOT be saved to Firebase."
        )
        return MemoryDocumentStore()

    if backend == "sql":
        from bizdesk.database import async_session
        from bizdesk.services.sql_store import SqlDocumentStore

        return SqlDocumentStore(async_session)

    raise ValueError(f"Unknown store backend: {backend!r}")


def set_store(store: Optional[DocumentStore]) -> None:
    global _store
    _store = store


def get_store() -> DocumentStore:
    """FastAPI dependency — the process-wide document store."""
    if _store is None:
        raise RuntimeError("Document store not initialised")
    return _store
