from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..core.constants import COURSE_REF, FIRST_NAME, LAST_NAME, SESSION_REF, STATUS, STUDENT_REF
from ..core.enums import AttendanceStatus, RecordOutcome
from ..store.model import DocumentRef


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status in one session.

    Lives in the flat Attendance collection and points at its course,
    student and session by reference.
    """

    attendance_id: str
    course_ref: DocumentRef
    student_ref: DocumentRef
    session_ref: DocumentRef
    status: AttendanceStatus
    extra: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AttendanceView:
    """Read-model: an attendance record joined with its student's names.

    first_name/last_name are None when the student document is gone.
    """

    record: AttendanceRecord
    first_name: Optional[str]
    last_name: Optional[str]

    @property
    def status(self) -> AttendanceStatus:
        return self.record.status

    def to_dict(self) -> Dict[str, Any]:
        r = self.record
        return {
            **r.extra,
            COURSE_REF: r.course_ref.path,
            STUDENT_REF: r.student_ref.path,
            SESSION_REF: r.session_ref.path,
            STATUS: r.status.value,
            "id": r.attendance_id,
            FIRST_NAME: self.first_name,
            LAST_NAME: self.last_name,
        }


@dataclass(frozen=True)
class RecordResult:
    outcome: RecordOutcome
    notice: str
    updated: int = 0

    @property
    def recorded(self) -> bool:
        return self.outcome == RecordOutcome.RECORDED

    def to_dict(self) -> Dict[str, Any]:
        return {"outcome": self.outcome.value, "message": self.notice, "updated": self.updated}
