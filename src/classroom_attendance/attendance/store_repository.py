from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.constants import ATTENDANCE, COURSE_REF, SESSION_REF, STATUS, STUDENT_REF
from ..core.enums import AttendanceStatus
from ..store.base import DocumentStore
from ..store.model import Document, Query, attendance_ref, course_ref, session_ref, student_ref
from ..store.subscription import Subscription
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(doc: Document) -> AttendanceRecord:
    data = dict(doc.data)
    return AttendanceRecord(
        attendance_id=doc.id,
        course_ref=data.pop(COURSE_REF),
        student_ref=data.pop(STUDENT_REF),
        session_ref=data.pop(SESSION_REF),
        status=AttendanceStatus(data.pop(STATUS, AttendanceStatus.NOT_SCANNED.value)),
        extra=data,
    )


class StoreAttendanceRepository(AttendanceRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def create_placeholder(self, *, course_id: str, student_id: str, session_id: str) -> str:
        return self._store.create(
            ATTENDANCE,
            {
                COURSE_REF: course_ref(course_id),
                STUDENT_REF: student_ref(course_id, student_id),
                SESSION_REF: session_ref(course_id, session_id),
                STATUS: AttendanceStatus.NOT_SCANNED.value,
            },
        )

    def get(self, attendance_id: str) -> Optional[AttendanceRecord]:
        doc = self._store.get(attendance_ref(attendance_id).path)
        return _to_record(doc) if doc else None

    def find_for_student_and_session(
        self,
        *,
        course_id: str,
        student_id: str,
        session_id: str,
    ) -> Sequence[AttendanceRecord]:
        query = (
            Query(ATTENDANCE)
            .where(STUDENT_REF, student_ref(course_id, student_id))
            .where(SESSION_REF, session_ref(course_id, session_id))
        )
        return [_to_record(d) for d in self._store.query(query)]

    def set_status(self, attendance_id: str, status: AttendanceStatus) -> None:
        self._store.update(attendance_ref(attendance_id).path, {STATUS: status.value})

    def delete(self, attendance_id: str) -> None:
        self._store.delete(attendance_ref(attendance_id).path)

    def list_for_course(self, course_id: str) -> Sequence[AttendanceRecord]:
        return [_to_record(d) for d in self._store.query_equal(ATTENDANCE, COURSE_REF, course_ref(course_id))]

    def list_for_session(self, *, course_id: str, session_id: str) -> Sequence[AttendanceRecord]:
        return [_to_record(d) for d in self._store.query(self._session_query(course_id, session_id))]

    def watch_for_session(self, *, course_id: str, session_id: str) -> Subscription[List[AttendanceRecord]]:
        subscription = self._store.subscribe(self._session_query(course_id, session_id))
        return subscription.map(lambda docs: [_to_record(d) for d in docs])

    @staticmethod
    def _session_query(course_id: str, session_id: str) -> Query:
        return (
            Query(ATTENDANCE)
            .where(SESSION_REF, session_ref(course_id, session_id))
            .where(COURSE_REF, course_ref(course_id))
        )
