"""
Protocol for the hierarchical document store.

Documents live in collections; a document may own sub-collections, so a
path alternates collection and document ids:
``question_sessions/{session_id}/open_ended_responses/question_1``.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

Document = dict[str, Any]


class DocumentStoreError(Exception):
    """Raised when the store rejects or fails an operation."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message if path is None else f"{message} ({path})")


class DocumentNotFoundError(DocumentStoreError):
    """Raised when merging into a document that does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__("Document not found", path)


@dataclass(frozen=True)
class CollectionPath:
    """Slash-separated path of a collection, e.g. ``question_sessions``."""

    path: str

    def __post_init__(self) -> None:
        segments = self.path.split("/")
        if any(not s for s in segments) or len(segments) % 2 != 1:
            raise ValueError(f"Invalid collection path: {self.path!r}")

    def document(self, document_id: str) -> "DocumentPath":
        return DocumentPath(self, document_id)

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class DocumentPath:
    """A document id inside a collection."""

    collection: CollectionPath
    document_id: str

    def __post_init__(self) -> None:
        if not self.document_id or "/" in self.document_id:
            raise ValueError(f"Invalid document id: {self.document_id!r}")

    def subcollection(self, name: str) -> CollectionPath:
        return CollectionPath(f"{self}/{name}")

    def __str__(self) -> str:
        return f"{self.collection}/{self.document_id}"


@dataclass(frozen=True)
class BatchWrite:
    """One document of an atomic batch. ``merge`` updates instead of replacing."""

    path: DocumentPath
    data: Document
    merge: bool = False


class DocumentStoreProtocol(Protocol):
    """Protocol for document store operations."""

    def set(self, path: DocumentPath, data: Mapping[str, Any]) -> None:
        """Create the document or overwrite it entirely."""
        ...

    def merge(self, path: DocumentPath, data: Mapping[str, Any]) -> None:
        """
        Update the given top-level fields of an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        ...

    def commit_batch(self, writes: Sequence[BatchWrite]) -> None:
        """
        Apply all writes atomically.

        Either every document is written or none is; a failure raises a
        single DocumentStoreError covering the whole batch.
        """
        ...

    def get(self, path: DocumentPath) -> Document | None:
        ...

    def list_documents(
        self,
        collection: CollectionPath,
        order_by: str | None = None,
        descending: bool = False,
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[Document]:
        """
        Read the documents of one collection.

        Args:
            collection: The collection to read
            order_by: Top-level field to sort by
            descending: Sort direction
            filters: Top-level field equality filters
            limit: Maximum number of documents returned

        Returns:
            Document data dicts
        """
        ...
