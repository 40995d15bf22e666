from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceQueryService, AttendanceRecorder
from .attendance.store_repository import StoreAttendanceRepository
from .attendance.window import SessionWindowPolicy
from .roster.service import RosterService
from .roster.store_repository import StoreCourseRepository, StoreStudentRepository
from .sessions.service import SessionService
from .sessions.store_repository import StoreSessionRepository
from .store.base import DocumentStore
from .store.connection import StoreConfig, StoreConnection


@dataclass(frozen=True)
class Container:
    store: DocumentStore

    courses_repo: StoreCourseRepository
    students_repo: StoreStudentRepository
    sessions_repo: StoreSessionRepository
    attendance_repo: StoreAttendanceRepository

    roster_service: RosterService
    session_service: SessionService
    attendance_recorder: AttendanceRecorder
    attendance_query_service: AttendanceQueryService


def build_container(*, store_config: dict, store: Optional[DocumentStore] = None) -> Container:
    if store is None:
        store = StoreConnection.get_instance(StoreConfig.from_dict(store_config)).store()

    courses_repo = StoreCourseRepository(store)
    students_repo = StoreStudentRepository(store)
    sessions_repo = StoreSessionRepository(store)
    attendance_repo = StoreAttendanceRepository(store)

    roster_service = RosterService(courses_repo, students_repo, sessions_repo, attendance_repo)
    session_service = SessionService(sessions_repo, students_repo, attendance_repo, courses_repo)
    attendance_recorder = AttendanceRecorder(sessions_repo, attendance_repo, policy=SessionWindowPolicy())
    attendance_query_service = AttendanceQueryService(attendance_repo, students_repo)

    return Container(
        store=store,
        courses_repo=courses_repo,
        students_repo=students_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        roster_service=roster_service,
        session_service=session_service,
        attendance_recorder=attendance_recorder,
        attendance_query_service=attendance_query_service,
    )
