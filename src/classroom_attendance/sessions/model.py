from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from ..core.constants import GRACE_PERIOD, SESSION_START


@dataclass(frozen=True)
class Session:
    """Domain entity: one attendance-taking window of a course.

    start_time and grace_period_end are kept as stored (ISO-8601 string,
    datetime or None); the attendance window policy parses them.
    """

    session_id: str
    course_id: str
    start_time: Any
    grace_period_end: Any
    extra: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            SESSION_START: self.start_time,
            GRACE_PERIOD: self.grace_period_end,
            "id": self.session_id,
            "courseId": self.course_id,
        }
