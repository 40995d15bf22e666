from __future__ import annotations

import logging
from typing import Any, List, Mapping, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.errors import log_store_errors
from ..common.validators import require_id, require_non_empty
from ..core.constants import DEFAULT_SNAPSHOT_TIMEOUT_SECONDS
from ..core.exceptions import ValidationError
from ..sessions.repository import SessionRepository
from ..store.subscription import Subscription
from .model import Course, CourseForm, Student
from .repository import CourseRepository, StudentRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Use cases: manage courses and the students enrolled in them."""

    def __init__(
        self,
        courses: CourseRepository,
        students: StudentRepository,
        sessions: SessionRepository | None = None,
        attendance: AttendanceRepository | None = None,
        *,
        snapshot_timeout: float = DEFAULT_SNAPSHOT_TIMEOUT_SECONDS,
    ):
        self._courses = courses
        self._students = students
        self._sessions = sessions
        self._attendance = attendance
        self._snapshot_timeout = snapshot_timeout

    # Courses

    @log_store_errors("adding course")
    def add_course(self, name: str, section: str, owner_id: str) -> str:
        name = require_non_empty(name, "Course name")
        owner_id = require_non_empty(owner_id, "Owner id")
        section = (section or "").strip()

        course_id = self._courses.create(name=name, section=section, owner_id=owner_id)
        logger.info("Created course %s (%s %s) for owner %s", course_id, name, section, owner_id)
        return course_id

    def submit_course_form(self, form: CourseForm) -> str:
        return self.add_course(form.name, form.section, form.owner_id)

    @log_store_errors("editing course")
    def edit_course(self, name: str, section: str, course_id: str) -> None:
        course_id = require_id(course_id, "Course id")
        name = require_non_empty(name, "Course name")
        self._courses.update(course_id, name=name, section=(section or "").strip())
        logger.info("Updated course %s", course_id)

    @log_store_errors("deleting course")
    def delete_course(self, course_id: str, *, cascade: bool = False) -> None:
        """Delete a course document.

        Without cascade the course's students, sessions and attendance
        records are left in place. With cascade they are deleted first,
        one document at a time (not atomic).
        """

        course_id = require_id(course_id, "Course id")
        if cascade:
            self._delete_children(course_id)
        self._courses.delete(course_id)
        logger.info("Deleted course %s (cascade=%s)", course_id, cascade)

    def _delete_children(self, course_id: str) -> None:
        if self._sessions is None or self._attendance is None:
            raise ValidationError("Cascading delete is not available")

        for record in self._attendance.list_for_course(course_id):
            self._attendance.delete(record.attendance_id)
        for session in self._sessions.list_for_course(course_id):
            self._sessions.delete(course_id, session.session_id)
        for student in self._students.list_for_course(course_id):
            self._students.delete(course_id, student.student_id)

    @log_store_errors("fetching courses")
    def get_courses(self, owner_id: str) -> List[Course]:
        """Courses owned by owner_id, as of the first live snapshot."""

        owner_id = require_non_empty(owner_id, "Owner id")
        with self._courses.watch_for_owner(owner_id) as subscription:
            return subscription.next_snapshot(timeout=self._snapshot_timeout)

    def watch_courses(self, owner_id: str) -> Subscription[List[Course]]:
        owner_id = require_non_empty(owner_id, "Owner id")
        return self._courses.watch_for_owner(owner_id)

    @log_store_errors("fetching course")
    def get_course(self, course_id: str) -> Course | None:
        return self._courses.get_by_id(require_id(course_id, "Course id"))

    # Students

    @log_store_errors("adding student")
    def add_student(self, course_id: str, student_data: Mapping[str, Any]) -> str:
        course_id = require_id(course_id, "Course id")
        student_id = self._students.create(course_id, dict(student_data or {}))
        logger.info("Added student %s to course %s", student_id, course_id)
        return student_id

    @log_store_errors("editing student")
    def edit_student(self, course_id: str, student_id: str, new_data: Mapping[str, Any]) -> None:
        course_id = require_id(course_id, "Course id")
        student_id = require_id(student_id, "Student id")
        self._students.update(course_id, student_id, dict(new_data or {}))
        logger.info("Updated student %s in course %s", student_id, course_id)

    @log_store_errors("deleting student")
    def delete_student(self, course_id: str, student_id: str) -> None:
        course_id = require_id(course_id, "Course id")
        student_id = require_id(student_id, "Student id")
        self._students.delete(course_id, student_id)
        logger.info("Deleted student %s from course %s", student_id, course_id)

    @log_store_errors("fetching students")
    def get_students(self, course_id: str) -> Sequence[Student]:
        return self._students.list_for_course(require_id(course_id, "Course id"))

    @log_store_errors("fetching student")
    def get_student(self, course_id: str, student_id: str) -> Student | None:
        return self._students.get(require_id(course_id, "Course id"), require_id(student_id, "Student id"))
