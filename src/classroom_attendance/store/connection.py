from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from ..core.enums import StoreBackend
from .base import DocumentStore
from .firestore import FirestoreDocumentStore
from .memory import InMemoryDocumentStore

logger = logging.getLogger(__name__)


@dataclass
class StoreConfig:
    backend: StoreBackend = StoreBackend.MEMORY
    credentials_file: Optional[str] = None
    credentials_json: Optional[Dict[str, Any]] = None
    project_id: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict) -> "StoreConfig":
        return cls(
            backend=StoreBackend(str(raw.get("backend") or StoreBackend.MEMORY.value).lower()),
            credentials_file=raw.get("credentials_file") or None,
            credentials_json=raw.get("credentials_json") or None,
            project_id=raw.get("project_id") or None,
        )


class StoreConnection:
    """Singleton-like factory for the configured document store.

    Note: The backend is created lazily and reused for the process lifetime.
    """

    _instance: Optional["StoreConnection"] = None

    def __init__(self, config: StoreConfig):
        self._config = config
        self._store: Optional[DocumentStore] = None

    @classmethod
    def get_instance(cls, config: StoreConfig) -> "StoreConnection":
        if cls._instance is None:
            cls._instance = StoreConnection(config)
        return cls._instance

    def store(self) -> DocumentStore:
        if self._store is None:
            self._store = self._connect()
        return self._store

    def _connect(self) -> DocumentStore:
        if self._config.backend == StoreBackend.FIRESTORE:
            logger.info("Connecting to Firestore (project=%s)", self._config.project_id or "<default>")
            return FirestoreDocumentStore(_firestore_client(self._config))

        logger.info("Using in-memory document store")
        return InMemoryDocumentStore()


def _firestore_client(config: StoreConfig):
    try:
        firebase_admin.get_app()
    except ValueError:
        if config.credentials_json is not None:
            cred = credentials.Certificate(config.credentials_json)
        elif config.credentials_file:
            cred = credentials.Certificate(config.credentials_file)
        else:
            cred = credentials.ApplicationDefault()
        options = {"projectId": config.project_id} if config.project_id else None
        firebase_admin.initialize_app(cred, options)

    return firestore.client()
