from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status values as stored in the Attendance collection."""

    NOT_SCANNED = "Not Scanned"
    PRESENT = "Present"


class StoreBackend(str, Enum):
    MEMORY = "memory"
    FIRESTORE = "firestore"


class RecordOutcome(str, Enum):
    """Result of a check-in attempt."""

    RECORDED = "RECORDED"
    NOT_STARTED = "NOT_STARTED"
    GRACE_ELAPSED = "GRACE_ELAPSED"
    NO_MATCH = "NO_MATCH"
