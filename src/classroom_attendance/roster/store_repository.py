from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from ..core.constants import COURSE_NAME, COURSE_OWNER, COURSE_SECTION, COURSES, FIRST_NAME, LAST_NAME
from ..store.base import DocumentStore
from ..store.model import Document, DocumentRef, Query, course_ref, student_ref, students_path
from ..store.subscription import Subscription
from .model import Course, Student
from .repository import CourseRepository, StudentRepository


def _to_course(doc: Document) -> Course:
    return Course(
        course_id=doc.id,
        name=doc.data.get(COURSE_NAME) or "",
        section=doc.data.get(COURSE_SECTION) or "",
        owner_id=doc.data.get(COURSE_OWNER) or "",
    )


def _to_student(doc: Document) -> Student:
    # Courses/{courseId}/Students/{studentId}
    course_id = doc.ref.segments[1]
    data = dict(doc.data)
    first_name = data.pop(FIRST_NAME, None)
    last_name = data.pop(LAST_NAME, None)
    return Student(
        student_id=doc.id,
        course_id=course_id,
        first_name=first_name,
        last_name=last_name,
        extra=data,
    )


class StoreCourseRepository(CourseRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def create(self, *, name: str, section: str, owner_id: str) -> str:
        return self._store.create(
            COURSES,
            {COURSE_NAME: name, COURSE_SECTION: section, COURSE_OWNER: owner_id},
        )

    def update(self, course_id: str, *, name: str, section: str) -> None:
        self._store.update(course_ref(course_id).path, {COURSE_NAME: name, COURSE_SECTION: section})

    def delete(self, course_id: str) -> None:
        self._store.delete(course_ref(course_id).path)

    def get_by_id(self, course_id: str) -> Optional[Course]:
        doc = self._store.get(course_ref(course_id).path)
        return _to_course(doc) if doc else None

    def watch_for_owner(self, owner_id: str) -> Subscription[List[Course]]:
        subscription = self._store.subscribe(Query(COURSES).where(COURSE_OWNER, owner_id))
        return subscription.map(lambda docs: [_to_course(d) for d in docs])


class StoreStudentRepository(StudentRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def create(self, course_id: str, data: Mapping[str, Any]) -> str:
        return self._store.create(students_path(course_id), data)

    def update(self, course_id: str, student_id: str, data: Mapping[str, Any]) -> None:
        self._store.update(student_ref(course_id, student_id).path, data)

    def delete(self, course_id: str, student_id: str) -> None:
        self._store.delete(student_ref(course_id, student_id).path)

    def get(self, course_id: str, student_id: str) -> Optional[Student]:
        return self.get_by_ref(student_ref(course_id, student_id))

    def get_by_ref(self, ref: DocumentRef) -> Optional[Student]:
        doc = self._store.get(ref.path)
        return _to_student(doc) if doc else None

    def list_for_course(self, course_id: str) -> Sequence[Student]:
        return [_to_student(d) for d in self._store.query(Query(students_path(course_id)))]
