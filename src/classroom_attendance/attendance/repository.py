from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..store.subscription import Subscription
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def create_placeholder(self, *, course_id: str, student_id: str, session_id: str) -> str:
        """Create a Not Scanned record for one student in one session."""

        raise NotImplementedError

    def get(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_for_student_and_session(
        self,
        *,
        course_id: str,
        student_id: str,
        session_id: str,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def set_status(self, attendance_id: str, status: AttendanceStatus) -> None:
        raise NotImplementedError

    def delete(self, attendance_id: str) -> None:
        raise NotImplementedError

    def list_for_course(self, course_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_session(self, *, course_id: str, session_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def watch_for_session(self, *, course_id: str, session_id: str) -> Subscription[List[AttendanceRecord]]:
        """Live list of the session's records; caller must close it."""

        raise NotImplementedError
