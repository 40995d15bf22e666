from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol

from .model import Document, Query
from .subscription import Subscription


class DocumentStore(Protocol):
    """Interface to a hierarchical collection/document store.

    Every operation raises StoreError on transport or permission failure.
    Services depend on this interface, never on a concrete backend.
    """

    def create(self, collection: str, data: Mapping[str, Any]) -> str:
        """Create a document with a generated id. Returns the id."""

        raise NotImplementedError

    def get(self, path: str) -> Optional[Document]:
        raise NotImplementedError

    def update(self, path: str, data: Mapping[str, Any]) -> None:
        """Merge fields into an existing document (StoreError if missing)."""

        raise NotImplementedError

    def delete(self, path: str) -> None:
        raise NotImplementedError

    def query(self, query: Query) -> List[Document]:
        raise NotImplementedError

    def query_equal(self, collection: str, field_name: str, value: Any) -> List[Document]:
        raise NotImplementedError

    def subscribe(self, query: Query) -> Subscription[List[Document]]:
        """Live query: an initial snapshot, then one per matching change."""

        raise NotImplementedError
