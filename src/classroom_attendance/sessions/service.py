from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_timestamp
from ..common.errors import log_store_errors
from ..common.validators import require_id
from ..core.constants import GRACE_PERIOD, SESSION_START
from ..core.exceptions import ValidationError
from ..roster.repository import CourseRepository, StudentRepository
from .model import Session
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionService:
    """Use cases: manage a course's sessions.

    Opening a session fans out one Not Scanned attendance record per student
    enrolled at that moment.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        students: StudentRepository,
        attendance: AttendanceRepository,
        courses: CourseRepository | None = None,
    ):
        self._sessions = sessions
        self._students = students
        self._attendance = attendance
        self._courses = courses

    @log_store_errors("adding session")
    def add_session(self, course_id: str, session_data: Mapping[str, Any]) -> str:
        course_id = require_id(course_id, "Course id")
        data = dict(session_data or {})
        _check_window(data.get(SESSION_START), data.get(GRACE_PERIOD))

        if self._courses is not None and self._courses.get_by_id(course_id) is None:
            raise ValidationError(f"Course {course_id} does not exist")

        session_id = self._sessions.create(course_id, data)

        # Roster is read once: students enrolled later get no record for this session.
        students = self._students.list_for_course(course_id)
        for student in students:
            self._attendance.create_placeholder(
                course_id=course_id,
                student_id=student.student_id,
                session_id=session_id,
            )

        logger.info(
            "Created session %s for course %s with %d attendance records",
            session_id, course_id, len(students),
        )
        return session_id

    @log_store_errors("editing session")
    def edit_session(self, course_id: str, session_id: str, new_data: Mapping[str, Any]) -> None:
        course_id = require_id(course_id, "Course id")
        session_id = require_id(session_id, "Session id")
        data = dict(new_data or {})

        if SESSION_START in data or GRACE_PERIOD in data:
            current = self._sessions.get(course_id, session_id)
            start = data.get(SESSION_START, current.start_time if current else None)
            grace = data.get(GRACE_PERIOD, current.grace_period_end if current else None)
            _check_window(start, grace)

        self._sessions.update(course_id, session_id, data)
        logger.info("Updated session %s in course %s", session_id, course_id)

    def update_session(self, course_id: str, session_id: str, new_data: Mapping[str, Any]) -> None:
        """Same as edit_session; kept for callers using the older name."""

        self.edit_session(course_id, session_id, new_data)

    @log_store_errors("deleting session")
    def delete_session(self, course_id: str, session_id: str, *, cascade: bool = False) -> None:
        """Delete a session. Its attendance records stay unless cascade is set."""

        course_id = require_id(course_id, "Course id")
        session_id = require_id(session_id, "Session id")
        if cascade:
            for record in self._attendance.list_for_session(course_id=course_id, session_id=session_id):
                self._attendance.delete(record.attendance_id)
        self._sessions.delete(course_id, session_id)
        logger.info("Deleted session %s from course %s (cascade=%s)", session_id, course_id, cascade)

    @log_store_errors("fetching sessions")
    def get_sessions(self, course_id: str) -> Sequence[Session]:
        return self._sessions.list_for_course(require_id(course_id, "Course id"))

    @log_store_errors("fetching session")
    def get_session(self, course_id: str, session_id: str) -> Session | None:
        return self._sessions.get(require_id(course_id, "Course id"), require_id(session_id, "Session id"))


def _check_window(start: Any, grace: Any) -> None:
    start_dt = parse_timestamp(start, SESSION_START)
    grace_dt = parse_timestamp(grace, GRACE_PERIOD)
    if start_dt and grace_dt and grace_dt < start_dt:
        raise ValidationError("Grace period must not end before the session starts")
