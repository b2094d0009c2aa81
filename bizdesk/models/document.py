"""
BizDesk — Document row for the SQL-backed document store.

Each row is one document of one collection. The payload lives in a JSON
column so every collection (invoices, activities, employees, ...) shares the
same table and the same query surface as the Firestore backend.
"""

import uuid

from sqlalchemy import Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from bizdesk.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex[:20]


class DocumentRecord(Base):
    __tablename__ = "documents"

    # Insertion order, breaks ties between documents with equal sort keys
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), nullable=False, default=_new_id)
    collection: Mapped[str] = mapped_column(String(64), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        UniqueConstraint("collection", "id", name="uq_documents_collection_id"),
        Index("ix_documents_collection_seq", "collection", "seq"),
    )

    def to_dict(self) -> dict:
        return {"id": self.id, **(self.data or {})}

    def __repr__(self):
        return f"<DocumentRecord {self.collection}/{self.id}>"
