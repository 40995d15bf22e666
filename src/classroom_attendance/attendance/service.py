from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Sequence

from ..common.datetime_utils import now_utc
from ..common.errors import log_store_errors
from ..common.validators import require_id
from ..core.constants import DEFAULT_SNAPSHOT_TIMEOUT_SECONDS
from ..core.enums import AttendanceStatus, RecordOutcome
from ..core.exceptions import ValidationError
from ..roster.repository import StudentRepository
from ..sessions.repository import SessionRepository
from ..store.subscription import Subscription
from .badges import Badge, decode_badge
from .model import AttendanceRecord, AttendanceView, RecordResult
from .repository import AttendanceRepository
from .window import SessionWindowPolicy

logger = logging.getLogger(__name__)

NO_MATCH_NOTICE = "No attendance record exists for this student in this session"
RECORDED_NOTICE = "Attendance recorded"


class AttendanceRecorder:
    """Use case: mark a student present in a session."""

    def __init__(
        self,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        *,
        policy: SessionWindowPolicy | None = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._sessions = sessions
        self._attendance = attendance
        self._policy = policy or SessionWindowPolicy()
        self._clock = clock

    @log_store_errors("recording attendance")
    def record_attendance(
        self,
        course_id: str,
        student_id: str,
        session_id: str,
        *,
        now: datetime | None = None,
    ) -> RecordResult:
        course_id = require_id(course_id, "Course id")
        student_id = require_id(student_id, "Student id")
        session_id = require_id(session_id, "Session id")

        session = self._sessions.get(course_id, session_id)
        if session is None:
            raise ValidationError(f"Session {session_id} does not exist in course {course_id}")

        now = now or self._clock()
        if now.tzinfo is None:
            now = now.astimezone()

        decision = self._policy.evaluate(
            now=now,
            start_time=session.start_time,
            grace_period_end=session.grace_period_end,
        )
        if not decision.is_open:
            logger.info(
                "Rejected check-in of student %s for session %s: %s",
                student_id, session_id, decision.rejection.value,
            )
            return RecordResult(outcome=decision.rejection, notice=decision.notice)

        records = self._attendance.find_for_student_and_session(
            course_id=course_id,
            student_id=student_id,
            session_id=session_id,
        )
        if not records:
            logger.warning(
                "No attendance record for student %s in session %s (course %s)",
                student_id, session_id, course_id,
            )
            return RecordResult(outcome=RecordOutcome.NO_MATCH, notice=NO_MATCH_NOTICE)

        if len(records) > 1:
            logger.warning(
                "Found %d attendance records for student %s in session %s",
                len(records), student_id, session_id,
            )
        for record in records:
            self._attendance.set_status(record.attendance_id, AttendanceStatus.PRESENT)

        logger.info("Student %s marked present in session %s", student_id, session_id)
        return RecordResult(outcome=RecordOutcome.RECORDED, notice=RECORDED_NOTICE, updated=len(records))

    def record_scan(
        self,
        course_id: str,
        session_id: str,
        code: str,
        *,
        now: datetime | None = None,
    ) -> RecordResult:
        """Record attendance from a scanned badge code."""

        return self.record_badge(course_id, session_id, decode_badge(code), now=now)

    def record_badge(
        self,
        course_id: str,
        session_id: str,
        badge: Badge,
        *,
        now: datetime | None = None,
    ) -> RecordResult:
        if badge.course_id != course_id:
            raise ValidationError("Badge was issued for another course")
        return self.record_attendance(course_id, badge.student_id, session_id, now=now)

    @log_store_errors("editing attendance")
    def mark_status(self, attendance_id: str, status) -> AttendanceRecord:
        """Set one record's status explicitly (instructor correction)."""

        attendance_id = require_id(attendance_id, "Attendance id")
        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown attendance status: {status!r}")

        record = self._attendance.get(attendance_id)
        if record is None:
            raise ValidationError(f"Attendance record {attendance_id} does not exist")

        self._attendance.set_status(attendance_id, status)
        logger.info("Attendance %s set to %s", attendance_id, status.value)
        return self._attendance.get(attendance_id) or record


class AttendanceQueryService:
    """Read-model: live attendance of a session joined with student names."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        snapshot_timeout: float = DEFAULT_SNAPSHOT_TIMEOUT_SECONDS,
    ):
        self._attendance = attendance
        self._students = students
        self._snapshot_timeout = snapshot_timeout

    @log_store_errors("subscribing to attendance")
    def get_attendance_data(self, session_id: str, course_id: str) -> Subscription[List[AttendanceView]]:
        """Live joined view; each snapshot re-reads the linked students.

        The returned subscription must be closed by the caller.
        """

        subscription = self._attendance.watch_for_session(
            course_id=require_id(course_id, "Course id"),
            session_id=require_id(session_id, "Session id"),
        )
        return subscription.map(self._join)

    @log_store_errors("fetching attendance")
    def get_attendance_snapshot(self, session_id: str, course_id: str) -> List[AttendanceView]:
        with self.get_attendance_data(session_id, course_id) as subscription:
            return subscription.next_snapshot(timeout=self._snapshot_timeout)

    def _join(self, records: Sequence[AttendanceRecord]) -> List[AttendanceView]:
        views = []
        for record in records:
            student = self._students.get_by_ref(record.student_ref)
            if student is None:
                logger.warning(
                    "Attendance %s points at missing student %s",
                    record.attendance_id, record.student_ref.path,
                )
                views.append(AttendanceView(record, None, None))
                continue
            views.append(AttendanceView(record, student.first_name, student.last_name))
        return views
