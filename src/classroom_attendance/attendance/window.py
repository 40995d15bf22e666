from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_timestamp
from ..core.constants import GRACE_PERIOD, SESSION_START
from ..core.enums import RecordOutcome

NOT_STARTED_NOTICE = "The session has not started yet, you can not record attendance for this session"
GRACE_ELAPSED_NOTICE = "The grace period has ended, you can no longer record attendance for this session"


@dataclass(frozen=True)
class WindowDecision:
    is_open: bool
    rejection: Optional[RecordOutcome] = None
    notice: Optional[str] = None


class SessionWindowPolicy:
    """Decide whether a check-in at `now` falls inside [start, grace end].

    Both bounds are inclusive and each one is optional.
    """

    def evaluate(self, *, now: datetime, start_time: Any, grace_period_end: Any) -> WindowDecision:
        start = parse_timestamp(start_time, SESSION_START)
        grace_end = parse_timestamp(grace_period_end, GRACE_PERIOD)

        if start is not None and now < start:
            return WindowDecision(False, RecordOutcome.NOT_STARTED, NOT_STARTED_NOTICE)
        if grace_end is not None and now > grace_end:
            return WindowDecision(False, RecordOutcome.GRACE_ELAPSED, GRACE_ELAPSED_NOTICE)
        return WindowDecision(True)
