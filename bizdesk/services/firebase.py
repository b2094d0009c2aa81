"""
BizDesk — Firestore document store.

Requires firebase-admin and a service account key. Uses the async
Firestore client so store calls never block the event loop.
"""

import logging
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.api_core.exceptions import GoogleAPICallError, NotFound
from google.cloud.firestore_v1.base_query import BaseQuery, FieldFilter

from bizdesk.services.store import DocumentNotFoundError, DocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)

_initialized = False


def init_firebase(cred_path: str = "", project_id: str = "") -> bool:
    """
    Initialize Firebase Admin SDK.

    Args:
        cred_path: Path to the service account JSON key file.
        project_id: Optional project id override.

    Returns True if init succeeded, False otherwise.
    """
    global _initialized

    if _initialized:
        return True

    if not cred_path:
        logger.warning("FIREBASE_CRED_PATH not set — Firestore backend disabled")
        return False

    try:
        cred = credentials.Certificate(cred_path)
        options = {"projectId": project_id} if project_id else None
        firebase_admin.initialize_app(cred, options)
        _initialized = True
        logger.info("✅ Firebase Admin SDK initialized")
        return True
    except Exception as e:
        logger.error(f"Firebase init failed: {e}")
        return False


def is_initialized() -> bool:
    """Check if Firebase Admin SDK is initialized."""
    return _initialized


class FirestoreDocumentStore(DocumentStore):
    """Document store on Cloud Firestore collections."""

    name = "firestore"

    def __init__(self, client=None):
        self._client = client if client is not None else firestore_async.client()

    async def add(self, collection: str, data: dict) -> str:
        try:
            _, ref = await self._client.collection(collection).add(data)
            return ref.id
        except GoogleAPICallError as e:
            raise DocumentStoreError(f"Firestore add to {collection} failed: {e}") from e

    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        try:
            snap = await self._client.collection(collection).document(doc_id).get()
        except GoogleAPICallError as e:
            raise DocumentStoreError(f"Firestore get {collection}/{doc_id} failed: {e}") from e
        if not snap.exists:
            return None
        return {"id": snap.id, **(snap.to_dict() or {})}

    async def update(self, collection: str, doc_id: str, fields: dict) -> None:
        try:
            await self._client.collection(collection).document(doc_id).update(fields)
        except NotFound as e:
            raise DocumentNotFoundError(collection, doc_id) from e
        except GoogleAPICallError as e:
            raise DocumentStoreError(f"Firestore update {collection}/{doc_id} failed: {e}") from e

    async def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> None:
        try:
            await self._client.collection(collection).document(doc_id).set(data, merge=merge)
        except GoogleAPICallError as e:
            raise DocumentStoreError(f"Firestore set {collection}/{doc_id} failed: {e}") from e

    async def delete(self, collection: str, doc_id: str) -> None:
        try:
            await self._client.collection(collection).document(doc_id).delete()
        except GoogleAPICallError as e:
            raise DocumentStoreError(f"Firestore delete {collection}/{doc_id} failed: {e}") from e

    async def query(
        self,
        collection: str,
        *,
        where: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        query = self._client.collection(collection)
        for field, value in (where or {}).items():
            query = query.where(filter=FieldFilter(field, "==", value))
        if order_by:
            direction = BaseQuery.DESCENDING if descending else BaseQuery.ASCENDING
            query = query.order_by(order_by, direction=direction)
        if limit is not None:
            query = query.limit(limit)

        try:
            snaps = await query.get()
        except GoogleAPICallError as e:
            raise DocumentStoreError(f"Firestore query {collection} failed: {e}") from e
        return [{"id": s.id, **(s.to_dict() or {})} for s in snaps]
