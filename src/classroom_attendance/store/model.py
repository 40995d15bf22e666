from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from ..core.constants import ATTENDANCE, COURSES, SESSIONS, STUDENTS


@dataclass(frozen=True)
class DocumentRef:
    """Reference to a document by its slash-separated path.

    Stored as the value of cross-reference fields; two refs are equal when
    their paths are equal.
    """

    path: str

    @property
    def id(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def collection(self) -> str:
        return self.path.rsplit("/", 1)[0]

    @property
    def segments(self) -> Tuple[str, ...]:
        return tuple(self.path.split("/"))


@dataclass(frozen=True)
class Document:
    ref: DocumentRef
    data: Dict[str, Any]

    @property
    def id(self) -> str:
        return self.ref.id

    @property
    def path(self) -> str:
        return self.ref.path


@dataclass(frozen=True)
class Query:
    """Equality-filtered query over one collection.

    A query without filters selects the whole collection.
    """

    collection: str
    filters: Tuple[Tuple[str, Any], ...] = field(default=())

    def where(self, field_name: str, value: Any) -> "Query":
        return Query(self.collection, self.filters + ((field_name, value),))

    def matches(self, data: Mapping[str, Any]) -> bool:
        return all(name in data and data[name] == value for name, value in self.filters)


def collection_path(*segments: str) -> str:
    return "/".join(segments)


def course_ref(course_id: str) -> DocumentRef:
    return DocumentRef(collection_path(COURSES, course_id))


def students_path(course_id: str) -> str:
    return collection_path(COURSES, course_id, STUDENTS)


def student_ref(course_id: str, student_id: str) -> DocumentRef:
    return DocumentRef(collection_path(students_path(course_id), student_id))


def sessions_path(course_id: str) -> str:
    return collection_path(COURSES, course_id, SESSIONS)


def session_ref(course_id: str, session_id: str) -> DocumentRef:
    return DocumentRef(collection_path(sessions_path(course_id), session_id))


def attendance_ref(attendance_id: str) -> DocumentRef:
    return DocumentRef(collection_path(ATTENDANCE, attendance_id))
