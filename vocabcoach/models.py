"""Database models."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from vocabcoach.database import Base


class Document(Base):
    """One document of the hierarchical document store."""

    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("collection", "document_id", name="uq_documents_collection_document_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    # Full collection path, e.g. "question_sessions/<id>/open_ended_responses"
    collection: Mapped[str] = mapped_column(String(512), index=True, nullable=False)
    document_id: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Document(collection='{self.collection}', document_id='{self.document_id}')>"
