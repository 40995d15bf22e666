from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1 import DocumentReference
from google.cloud.firestore_v1.base_query import FieldFilter

from ..core.exceptions import StoreError
from .base import DocumentStore
from .model import Document, DocumentRef, Query
from .subscription import Subscription

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """DocumentStore backed by Cloud Firestore (via firebase_admin).

    DocumentRef values are written as native document references so that
    equality queries on cross-reference fields behave like in the console.
    """

    def __init__(self, client):
        self._client = client

    def create(self, collection: str, data: Mapping[str, Any]) -> str:
        try:
            _, ref = self._client.collection(collection).add(self._encode(data))
        except google_exceptions.GoogleAPIError as e:
            raise StoreError(f"create in {collection} failed: {e}") from e
        return ref.id

    def get(self, path: str) -> Optional[Document]:
        try:
            snapshot = self._client.document(path).get()
        except google_exceptions.GoogleAPIError as e:
            raise StoreError(f"get {path} failed: {e}") from e
        if not snapshot.exists:
            return None
        return self._to_document(snapshot)

    def update(self, path: str, data: Mapping[str, Any]) -> None:
        try:
            self._client.document(path).update(self._encode(data))
        except google_exceptions.GoogleAPIError as e:
            raise StoreError(f"update {path} failed: {e}") from e

    def delete(self, path: str) -> None:
        try:
            self._client.document(path).delete()
        except google_exceptions.GoogleAPIError as e:
            raise StoreError(f"delete {path} failed: {e}") from e

    def query(self, query: Query) -> List[Document]:
        try:
            return [self._to_document(s) for s in self._build(query).stream()]
        except google_exceptions.GoogleAPIError as e:
            raise StoreError(f"query on {query.collection} failed: {e}") from e

    def query_equal(self, collection: str, field_name: str, value: Any) -> List[Document]:
        return self.query(Query(collection).where(field_name, value))

    def subscribe(self, query: Query) -> Subscription[List[Document]]:
        subscription: Subscription[List[Document]] = Subscription()

        def on_snapshot(snapshots, changes, read_time) -> None:
            try:
                subscription.push([self._to_document(s) for s in snapshots])
            except Exception as e:
                logger.exception("Failed to convert snapshot for %s", query.collection)
                subscription.fail(StoreError(f"snapshot on {query.collection} failed: {e}"))

        try:
            watch = self._build(query).on_snapshot(on_snapshot)
        except google_exceptions.GoogleAPIError as e:
            raise StoreError(f"subscribe on {query.collection} failed: {e}") from e

        subscription.bind(watch.unsubscribe)
        return subscription

    def _build(self, query: Query):
        ref = self._client.collection(query.collection)
        for name, value in query.filters:
            ref = ref.where(filter=FieldFilter(name, "==", self._encode_value(value)))
        return ref

    def _encode_value(self, value: Any) -> Any:
        if isinstance(value, DocumentRef):
            return self._client.document(value.path)
        return value

    def _encode(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {k: self._encode_value(v) for k, v in data.items()}

    def _to_document(self, snapshot) -> Document:
        data = {
            k: DocumentRef(v.path) if isinstance(v, DocumentReference) else v
            for k, v in (snapshot.to_dict() or {}).items()
        }
        return Document(DocumentRef(snapshot.reference.path), data)
