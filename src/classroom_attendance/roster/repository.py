from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, Sequence

from ..store.model import DocumentRef
from ..store.subscription import Subscription
from .model import Course, Student


class CourseRepository(Protocol):
    def create(self, *, name: str, section: str, owner_id: str) -> str:
        raise NotImplementedError

    def update(self, course_id: str, *, name: str, section: str) -> None:
        raise NotImplementedError

    def delete(self, course_id: str) -> None:
        raise NotImplementedError

    def get_by_id(self, course_id: str) -> Optional[Course]:
        raise NotImplementedError

    def watch_for_owner(self, owner_id: str) -> Subscription[List[Course]]:
        """Live list of the owner's courses; caller must close it."""

        raise NotImplementedError


class StudentRepository(Protocol):
    def create(self, course_id: str, data: Mapping[str, Any]) -> str:
        raise NotImplementedError

    def update(self, course_id: str, student_id: str, data: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, course_id: str, student_id: str) -> None:
        raise NotImplementedError

    def get(self, course_id: str, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_ref(self, ref: DocumentRef) -> Optional[Student]:
        raise NotImplementedError

    def list_for_course(self, course_id: str) -> Sequence[Student]:
        raise NotImplementedError
