from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def create(self, course_id: str, data: Mapping[str, Any]) -> str:
        raise NotImplementedError

    def update(self, course_id: str, session_id: str, data: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, course_id: str, session_id: str) -> None:
        raise NotImplementedError

    def get(self, course_id: str, session_id: str) -> Optional[Session]:
        raise NotImplementedError

    def list_for_course(self, course_id: str) -> Sequence[Session]:
        raise NotImplementedError
