from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.constants import GRACE_PERIOD, SESSION_START
from ..store.base import DocumentStore
from ..store.model import Document, Query, session_ref, sessions_path
from .model import Session
from .repository import SessionRepository


def _to_session(doc: Document) -> Session:
    data = dict(doc.data)
    return Session(
        session_id=doc.id,
        course_id=doc.ref.segments[1],
        start_time=data.pop(SESSION_START, None),
        grace_period_end=data.pop(GRACE_PERIOD, None),
        extra=data,
    )


class StoreSessionRepository(SessionRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def create(self, course_id: str, data: Mapping[str, Any]) -> str:
        return self._store.create(sessions_path(course_id), data)

    def update(self, course_id: str, session_id: str, data: Mapping[str, Any]) -> None:
        self._store.update(session_ref(course_id, session_id).path, data)

    def delete(self, course_id: str, session_id: str) -> None:
        self._store.delete(session_ref(course_id, session_id).path)

    def get(self, course_id: str, session_id: str) -> Optional[Session]:
        doc = self._store.get(session_ref(course_id, session_id).path)
        return _to_session(doc) if doc else None

    def list_for_course(self, course_id: str) -> Sequence[Session]:
        return [_to_session(d) for d in self._store.query(Query(sessions_path(course_id)))]
