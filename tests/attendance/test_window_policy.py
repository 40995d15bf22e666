from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from classroom_attendance.attendance.window import SessionWindowPolicy
from classroom_attendance.core.enums import RecordOutcome
from classroom_attendance.core.exceptions import ValidationError

T0 = datetime(2026, 2, 1, 9, 0, 0, tzinfo=timezone.utc)
T1 = datetime(2026, 2, 1, 9, 15, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "now,is_open,rejection",
    [
        (T0 - timedelta(seconds=1), False, RecordOutcome.NOT_STARTED),
        (T0, True, None),
        (T0 + timedelta(minutes=5), True, None),
        (T1, True, None),
        (T1 + timedelta(seconds=1), False, RecordOutcome.GRACE_ELAPSED),
    ],
)
def test_window_bounds_are_inclusive(now, is_open, rejection):
    decision = SessionWindowPolicy().evaluate(
        now=now,
        start_time="2026-02-01T09:00:00Z",
        grace_period_end="2026-02-01T09:15:00+00:00",
    )
    assert decision.is_open is is_open
    assert decision.rejection == rejection


def test_missing_bounds_leave_window_open():
    policy = SessionWindowPolicy()
    assert policy.evaluate(now=T0, start_time=None, grace_period_end=None).is_open
    assert policy.evaluate(now=T0, start_time="", grace_period_end=None).is_open


def test_only_start_bound():
    policy = SessionWindowPolicy()
    assert not policy.evaluate(now=T0, start_time=T1, grace_period_end=None).is_open
    assert policy.evaluate(now=T1 + timedelta(days=30), start_time=T1, grace_period_end=None).is_open


def test_only_grace_bound():
    policy = SessionWindowPolicy()
    decision = policy.evaluate(now=T1 + timedelta(minutes=1), start_time=None, grace_period_end=T1)
    assert decision.rejection == RecordOutcome.GRACE_ELAPSED
    assert "grace period has ended" in decision.notice


def test_timestamp_without_offset_is_local_time():
    local_start = datetime(2026, 2, 1, 9, 0, 0)
    now = local_start.astimezone()

    decision = SessionWindowPolicy().evaluate(now=now, start_time="2026-02-01T09:00:00", grace_period_end=None)
    assert decision.is_open


def test_unparseable_timestamp_raises():
    with pytest.raises(ValidationError):
        SessionWindowPolicy().evaluate(now=T0, start_time="soon", grace_period_end=None)
