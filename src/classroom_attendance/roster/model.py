from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..core.constants import COURSE_NAME, COURSE_OWNER, COURSE_SECTION, FIRST_NAME, LAST_NAME


@dataclass(frozen=True)
class Course:
    """Domain entity: a course owned by one instructor."""

    course_id: str
    name: str
    section: str
    owner_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.course_id,
            COURSE_NAME: self.name,
            COURSE_SECTION: self.section,
            COURSE_OWNER: self.owner_id,
        }


@dataclass(frozen=True)
class Student:
    """Domain entity: a student enrolled in exactly one course.

    extra holds any additional roster fields (email, student number, ...).
    """

    student_id: str
    course_id: str
    first_name: Optional[str]
    last_name: Optional[str]
    extra: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            FIRST_NAME: self.first_name,
            LAST_NAME: self.last_name,
            "id": self.student_id,
            "courseId": self.course_id,
        }


@dataclass(frozen=True)
class CourseForm:
    """Submitted values of the add-course form."""

    name: str
    section: str
    owner_id: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CourseForm":
        return cls(
            name=str(data.get(COURSE_NAME) or ""),
            section=str(data.get(COURSE_SECTION) or ""),
            owner_id=str(data.get(COURSE_OWNER) or ""),
        )
