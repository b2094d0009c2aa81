"""
BizDesk — SQL document store (SQLAlchemy async).

Documents are rows of the ``documents`` table; filters and sort keys are
JSON-path expressions on the payload, so the same code runs on SQLite
(aiosqlite) and PostgreSQL (asyncpg).
"""

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bizdesk.models.document import DocumentRecord
from bizdesk.services.store import DocumentNotFoundError, DocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)


def _json_field(field: str, value: Any = None):
    """Typed JSON extraction for ``field`` matching the Python type of ``value``."""
    expr = DocumentRecord.data[field]
    if isinstance(value, bool):
        return expr.as_boolean()
    if isinstance(value, int):
        return expr.as_integer()
    if isinstance(value, float):
        return expr.as_float()
    return expr.as_string()


class SqlDocumentStore(DocumentStore):
    name = "sql"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def _find(self, session: AsyncSession, collection: str, doc_id: str) -> Optional[DocumentRecord]:
        result = await session.execute(
            select(DocumentRecord)
            .where(DocumentRecord.collection == collection)
            .where(DocumentRecord.id == doc_id)
        )
        return result.scalar_one_or_none()

    async def add(self, collection: str, data: dict) -> str:
        try:
            async with self._session_factory() as session:
                record = DocumentRecord(collection=collection, data=dict(data))
                session.add(record)
                await session.commit()
                return record.id
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"add to {collection} failed: {e}") from e

    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        try:
            async with self._session_factory() as session:
                record = await self._find(session, collection, doc_id)
                return record.to_dict() if record else None
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"get {collection}/{doc_id} failed: {e}") from e

    async def update(self, collection: str, doc_id: str, fields: dict) -> None:
        try:
            async with self._session_factory() as session:
                record = await self._find(session, collection, doc_id)
                if record is None:
                    raise DocumentNotFoundError(collection, doc_id)
                # Reassign so the JSON column is flagged dirty
                record.data = {**(record.data or {}), **fields}
                await session.commit()
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"update {collection}/{doc_id} failed: {e}") from e

    async def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> None:
        try:
            async with self._session_factory() as session:
                record = await self._find(session, collection, doc_id)
                if record is None:
                    session.add(DocumentRecord(id=doc_id, collection=collection, data=dict(data)))
                elif merge:
                    record.data = {**(record.data or {}), **data}
                else:
                    record.data = dict(data)
                await session.commit()
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"set {collection}/{doc_id} failed: {e}") from e

    async def delete(self, collection: str, doc_id: str) -> None:
        try:
            async with self._session_factory() as session:
                record = await self._find(session, collection, doc_id)
                if record is not None:
                    await session.delete(record)
                    await session.commit()
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"delete {collection}/{doc_id} failed: {e}") from e

    async def query(
        self,
        collection: str,
        *,
        where: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        stmt = select(DocumentRecord).where(DocumentRecord.collection == collection)
        for field, value in (where or {}).items():
            stmt = stmt.where(_json_field(field, value) == value)

        if order_by:
            key = _json_field(order_by)
            stmt = stmt.where(key.is_not(None))
            if descending:
                stmt = stmt.order_by(key.desc(), DocumentRecord.seq.desc())
            else:
                stmt = stmt.order_by(key.asc(), DocumentRecord.seq.asc())
        else:
            stmt = stmt.order_by(DocumentRecord.seq.asc())

        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [r.to_dict() for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"query {collection} failed: {e}") from e
