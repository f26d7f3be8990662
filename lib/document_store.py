# =============================================================================
# lib/document_store.py - Document Store Port
# =============================================================================
# Storage-agnostic interface the services talk to. Documents are plain dicts
# keyed by table name; every document carries a string "id".
#
# The production adapter lives in lib/supabase_client.py. Tests provide an
# in-memory implementation of the same interface.
# =============================================================================

from abc import ABC, abstractmethod
from typing import Any

Document = dict[str, Any]


class DocumentStoreError(Exception):
    """Raised by adapters when the backing store fails a read or write."""


class DocumentStore(ABC):
    """
    Abstract persistence for Brand, Car, User and Order documents.

    Implementations return fresh dicts; callers may mutate what they get
    back without affecting stored state.
    """

    @abstractmethod
    def find(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        exclude: dict[str, Any] | None = None,
    ) -> list[Document]:
        """
        Find documents matching every `filters` equality and none of the
        `exclude` equalities.
        """

    @abstractmethod
    def find_one(self, table: str, filters: dict[str, Any]) -> Document | None:
        """Find the first document matching `filters`, or None."""

    @abstractmethod
    def find_by_id(self, table: str, doc_id: str) -> Document | None:
        """Find a document by id, or None."""

    @abstractmethod
    def find_by_ids(self, table: str, doc_ids: list[str]) -> list[Document]:
        """Find every document whose id is in `doc_ids` (missing ids are skipped)."""

    @abstractmethod
    def insert(self, table: str, data: Document) -> Document:
        """Insert a document and return it with its generated id."""

    @abstractmethod
    def update(self, table: str, doc_id: str, data: Document) -> Document | None:
        """Apply a partial update; return the updated document or None if absent."""

    @abstractmethod
    def delete(self, table: str, doc_id: str) -> Document | None:
        """Delete by id; return the removed document or None if absent."""

    @abstractmethod
    def ping(self) -> None:
        """Raise if the backing store can't be reached."""

    def populate(
        self,
        docs: list[Document],
        field: str,
        table: str,
    ) -> list[Document]:
        """
        Replace referenced ids in `field` with the referenced documents.

        A scalar reference becomes the document (or None when it no longer
        resolves). A list of references becomes the list of documents that
        still resolve, in the stored order.
        """
        ids: list[str] = []
        for doc in docs:
            value = doc.get(field)
            if isinstance(value, list):
                ids.extend(str(v) for v in value)
            elif value:
                ids.append(str(value))

        found: dict[str, Document] = {}
        if ids:
            unique_ids = list(dict.fromkeys(ids))
            found = {str(d["id"]): d for d in self.find_by_ids(table, unique_ids)}

        populated = []
        for doc in docs:
            doc = dict(doc)
            value = doc.get(field)
            if isinstance(value, list):
                doc[field] = [dict(found[str(v)]) for v in value if str(v) in found]
            elif value:
                ref = found.get(str(value))
                doc[field] = dict(ref) if ref else None
            populated.append(doc)
        return populated
