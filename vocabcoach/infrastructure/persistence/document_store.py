"""
Document store backed by a single SQL table.

Each document is one row keyed by its collection path and document id, with
the document body in a JSON column. Sub-collections are just longer
collection paths, so nesting needs no extra tables.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import ColumnElement, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from vocabcoach.application.questions.protocols.document_store import (
    BatchWrite,
    CollectionPath,
    Document,
    DocumentNotFoundError,
    DocumentPath,
    DocumentStoreError,
)
from vocabcoach.models import Document as DocumentORM

logger = logging.getLogger(__name__)


class SqlDocumentStore:
    """DocumentStoreProtocol implementation using SQLAlchemy."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        """
        Initialize store.

        Args:
            session_factory: Factory for SQLAlchemy sessions, one session per operation
        """
        self.session_factory = session_factory

    def set(self, path: DocumentPath, data: Mapping[str, Any]) -> None:
        try:
            with self.session_factory.begin() as db:
                self._write(db, BatchWrite(path=path, data=dict(data)))
        except SQLAlchemyError as e:
            logger.error(f"Failed to write document {path}: {e!s}", exc_info=True)
            raise DocumentStoreError(f"Failed to write document: {e!s}", str(path)) from e

    def merge(self, path: DocumentPath, data: Mapping[str, Any]) -> None:
        try:
            with self.session_factory.begin() as db:
                self._write(db, BatchWrite(path=path, data=dict(data), merge=True))
        except SQLAlchemyError as e:
            logger.error(f"Failed to merge document {path}: {e!s}", exc_info=True)
            raise DocumentStoreError(f"Failed to merge document: {e!s}", str(path)) from e

    def commit_batch(self, writes: Sequence[BatchWrite]) -> None:
        if not writes:
            return
        try:
            with self.session_factory.begin() as db:
                for write in writes:
                    self._write(db, write)
        except SQLAlchemyError as e:
            logger.error(f"Failed to commit batch of {len(writes)} documents: {e!s}", exc_info=True)
            raise DocumentStoreError(f"Failed to commit batch: {e!s}") from e
        logger.debug(f"Committed batch of {len(writes)} documents")

    def get(self, path: DocumentPath) -> Document | None:
        try:
            with self.session_factory() as db:
                row = self._find(db, path)
                return dict(row.data) if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to read document {path}: {e!s}", exc_info=True)
            raise DocumentStoreError(f"Failed to read document: {e!s}", str(path)) from e

    def list_documents(
        self,
        collection: CollectionPath,
        order_by: str | None = None,
        descending: bool = False,
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[Document]:
        stmt = select(DocumentORM.data).where(DocumentORM.collection == str(collection))
        for key, value in (filters or {}).items():
            stmt = stmt.where(_field_equals(key, value))
        if order_by is None:
            stmt = stmt.order_by(DocumentORM.id)

        try:
            with self.session_factory() as db:
                documents = [dict(data) for data in db.scalars(stmt)]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list collection {collection}: {e!s}", exc_info=True)
            raise DocumentStoreError(f"Failed to list documents: {e!s}", str(collection)) from e

        if order_by is not None:
            # Documents missing the field sort last in either direction
            present = [d for d in documents if d.get(order_by) is not None]
            missing = [d for d in documents if d.get(order_by) is None]
            present.sort(key=lambda d: d[order_by], reverse=descending)
            documents = present + missing
        if limit is not None:
            documents = documents[:limit]
        return documents

    def _find(self, db: Session, path: DocumentPath) -> DocumentORM | None:
        stmt = select(DocumentORM).where(
            DocumentORM.collection == str(path.collection),
            DocumentORM.document_id == path.document_id,
        )
        return db.scalars(stmt).first()

    def _write(self, db: Session, write: BatchWrite) -> None:
        row = self._find(db, write.path)
        if write.merge:
            if row is None:
                raise DocumentNotFoundError(str(write.path))
            # Assign a new dict so the JSON column is flagged dirty
            row.data = {**row.data, **write.data}
        elif row is None:
            db.add(
                DocumentORM(
                    collection=str(write.path.collection),
                    document_id=write.path.document_id,
                    data=dict(write.data),
                )
            )
        else:
            row.data = dict(write.data)
        db.flush()


def _field_equals(key: str, value: Any) -> ColumnElement[bool]:  # noqa: ANN401
    field = DocumentORM.data[key]
    if isinstance(value, bool):
        return field.as_boolean() == value
    if isinstance(value, int):
        return field.as_integer() == value
    if isinstance(value, float):
        return field.as_float() == value
    return field.as_string() == str(value)
