from __future__ import annotations

import copy
import logging
import secrets
import string
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..core.constants import GENERATED_ID_LENGTH
from ..core.exceptions import StoreError
from .base import DocumentStore
from .model import Document, DocumentRef, Query
from .subscription import Subscription

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_letters + string.digits


def generate_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(GENERATED_ID_LENGTH))


def _check_collection_path(path: str) -> None:
    segments = path.split("/")
    if not path or any(not s for s in segments) or len(segments) % 2 == 0:
        raise StoreError(f"Invalid collection path: {path!r}")


def _check_document_path(path: str) -> None:
    segments = path.split("/")
    if not path or any(not s for s in segments) or len(segments) % 2 == 1:
        raise StoreError(f"Invalid document path: {path!r}")


class InMemoryDocumentStore(DocumentStore):
    """Process-local document store.

    Subscribers are notified synchronously, after each write, with the full
    result-set of their query. Safe to share between threads.
    """

    def __init__(self, *, id_factory: Optional[Callable[[], str]] = None):
        self._docs: Dict[str, Dict[str, Any]] = {}
        self._subscriptions: List[Tuple[Query, Subscription[List[Document]]]] = []
        self._lock = threading.RLock()
        self._id_factory = id_factory or generate_id

    def create(self, collection: str, data: Mapping[str, Any]) -> str:
        _check_collection_path(collection)
        with self._lock:
            doc_id = self._id_factory()
            path = f"{collection}/{doc_id}"
            if path in self._docs:
                raise StoreError(f"Document already exists: {path}")
            self._docs[path] = copy.deepcopy(dict(data))
            self._notify(path, None, self._docs[path])
        return doc_id

    def get(self, path: str) -> Optional[Document]:
        _check_document_path(path)
        with self._lock:
            data = self._docs.get(path)
            if data is None:
                return None
            return Document(DocumentRef(path), copy.deepcopy(data))

    def update(self, path: str, data: Mapping[str, Any]) -> None:
        _check_document_path(path)
        with self._lock:
            current = self._docs.get(path)
            if current is None:
                raise StoreError(f"No document to update: {path}")
            before = copy.deepcopy(current)
            current.update(copy.deepcopy(dict(data)))
            self._notify(path, before, current)

    def delete(self, path: str) -> None:
        _check_document_path(path)
        with self._lock:
            before = self._docs.pop(path, None)
            if before is not None:
                self._notify(path, before, None)

    def query(self, query: Query) -> List[Document]:
        _check_collection_path(query.collection)
        with self._lock:
            return self._run(query)

    def query_equal(self, collection: str, field_name: str, value: Any) -> List[Document]:
        return self.query(Query(collection).where(field_name, value))

    def subscribe(self, query: Query) -> Subscription[List[Document]]:
        _check_collection_path(query.collection)
        subscription: Subscription[List[Document]] = Subscription()
        entry = (query, subscription)

        def unsubscribe() -> None:
            with self._lock:
                if entry in self._subscriptions:
                    self._subscriptions.remove(entry)

        with self._lock:
            self._subscriptions.append(entry)
            subscription.bind(unsubscribe)
            subscription.push(self._run(query))
        return subscription

    @property
    def subscription_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def _run(self, query: Query) -> List[Document]:
        return [
            Document(DocumentRef(path), copy.deepcopy(data))
            for path, data in self._docs.items()
            if path.rsplit("/", 1)[0] == query.collection and query.matches(data)
        ]

    def _notify(self, path: str, before: Optional[Mapping[str, Any]], after: Optional[Mapping[str, Any]]) -> None:
        collection = path.rsplit("/", 1)[0]
        for query, subscription in list(self._subscriptions):
            if query.collection != collection:
                continue
            hit_before = before is not None and query.matches(before)
            hit_after = after is not None and query.matches(after)
            if hit_before or hit_after:
                logger.debug("Notifying subscription on %s after change to %s", collection, path)
                subscription.push(self._run(query))
